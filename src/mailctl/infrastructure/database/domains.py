"""Domain name to ``virtual_domains.id`` resolution.

No caching: a mailctl process resolves at most one domain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from mailctl.errors import DomainLookupError, MissingDomainError
from mailctl.infrastructure.database.schema import virtual_domains

if TYPE_CHECKING:
    from sqlalchemy import Connection


def resolve_domain_id(conn: Connection, name: str | None) -> int:
    """Look up the id of the domain called exactly *name*.

    Raises:
        MissingDomainError: If *name* is empty or None.
        DomainLookupError: If no domain row matches.
    """
    if not name:
        raise MissingDomainError("No domain provided")

    row = conn.execute(
        select(virtual_domains.c.id).where(virtual_domains.c.name == name)
    ).first()
    if row is None:
        raise DomainLookupError(f"Couldn't find domain {name}", domain=name)
    return int(row.id)
