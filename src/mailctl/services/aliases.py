"""AliasService: add forwarding aliases.

Only the source address is tied to a local domain; the destination is
stored verbatim and may point anywhere.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from mailctl.domain.addresses import split_address
from mailctl.errors import MailctlError
from mailctl.infrastructure.database.schema import virtual_aliases
from mailctl.services.base import BaseService
from mailctl.services.result import ServiceResult


class AliasService(BaseService):
    """Handles the add-alias command."""

    def add_alias(self) -> ServiceResult:
        """Insert a ``source -> destination`` forwarding row.

        The owning domain is the source's domain part, or ``-domain`` when
        the source is a bare local part.
        """
        op = "add_alias"
        source = self._request.source or ""
        destination = self._request.destination or ""
        _, source_domain = split_address(source)
        domain = source_domain or self._request.domain

        try:
            new_id, domain_id = self._insert_with_next_id(
                virtual_aliases,
                domain,
                {"source": source, "destination": destination},
            )
        except MailctlError as exc:
            return self._from_error(op, exc)
        except SQLAlchemyError as exc:
            return self._from_driver_error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            message=f"Alias from {source} to {destination} added successfully",
            data={
                "id": new_id,
                "domain_id": domain_id,
                "source": source,
                "destination": destination,
            },
        )
