"""Exception hierarchy raised below the service layer.

Infrastructure helpers raise these instead of terminating the process.
Services translate them into a failed :class:`ServiceResult`, and the
CLI boundary alone decides what is printed and which exit code is used.
"""

from __future__ import annotations


class MailctlError(Exception):
    """Base class for all mailctl errors.

    Attributes:
        code: Stable error code copied into ``ServiceError.code``.
    """

    code = "MAILCTL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DatabaseConnectionError(MailctlError):
    """The database could not be reached or the login was refused."""

    code = "CONNECTION_FAILED"


class DomainLookupError(MailctlError):
    """A domain name was missing or is not present in ``virtual_domains``."""

    code = "DOMAIN_NOT_FOUND"

    def __init__(self, message: str, *, domain: str | None = None) -> None:
        super().__init__(message)
        self.domain = domain


class MissingDomainError(DomainLookupError):
    code = "NO_DOMAIN"


class IdAllocationError(MailctlError):
    """``MAX(id)`` produced no row for the requested table."""

    code = "ID_ALLOCATION"

    def __init__(self, table: str) -> None:
        super().__init__(f"Couldn't find max id in table {table}")
        self.table = table
