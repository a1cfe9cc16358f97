"""Mail database gateway, schema, id allocation and domain lookup via SQLAlchemy Core."""

from mailctl.infrastructure.database.counters import NO_TABLE_ID, next_id
from mailctl.infrastructure.database.domains import resolve_domain_id
from mailctl.infrastructure.database.engine import MailDatabase, build_url, create_db_engine
from mailctl.infrastructure.database.hashing import SaltedHash
from mailctl.infrastructure.database.schema import (
    metadata,
    virtual_aliases,
    virtual_domains,
    virtual_users,
)

__all__ = [
    "NO_TABLE_ID",
    "MailDatabase",
    "SaltedHash",
    "build_url",
    "create_db_engine",
    "metadata",
    "next_id",
    "resolve_domain_id",
    "virtual_aliases",
    "virtual_domains",
    "virtual_users",
]
