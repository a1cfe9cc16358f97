"""ServiceResult and ServiceError, the universal service contract.

INVARIANT: All service-layer methods return ServiceResult, success or
failure.  Nothing below the CLI boundary prints or exits.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_user"``).
        message: The single human-readable line shown on stdout.
        data: Operation-specific payload (email, id, ...).
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Build a failed result whose message doubles as the error message."""
        return cls(
            ok=False,
            op=op,
            message=message,
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
