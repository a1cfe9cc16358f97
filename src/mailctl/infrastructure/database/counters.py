"""Next-id allocation for tables whose ids are assigned by mailctl.

The mail schema does not rely on AUTO_INCREMENT: each insert supplies
``MAX(id) + 1`` explicitly.  The caller owns the transaction: pass the
``Connection`` from :meth:`MailDatabase.transaction` so the read and the
following INSERT commit or roll back together.  On MySQL/MariaDB the read
takes ``FOR UPDATE`` locks, so a concurrent allocator for the same table
blocks until this transaction ends instead of computing the same id.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from mailctl.errors import IdAllocationError
from mailctl.infrastructure.database.schema import metadata

if TYPE_CHECKING:
    from sqlalchemy import Connection

logger = logging.getLogger(__name__)

NO_TABLE_ID = -1


def next_id(conn: Connection, table_name: str) -> int:
    """Return the id the next row inserted into *table_name* should use.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        table_name: One of the tables in :data:`schema.metadata`.

    Returns:
        ``MAX(id) + 1``; ``1`` when the table is empty (``MAX`` is NULL);
        :data:`NO_TABLE_ID` when *table_name* is empty, without querying.

    Raises:
        ValueError: If *table_name* is not a known mail table.
        IdAllocationError: If the ``MAX(id)`` query returned no row.
    """
    if not table_name:
        return NO_TABLE_ID

    table = metadata.tables.get(table_name)
    if table is None:
        msg = f"Unknown table: {table_name!r}. Expected one of {sorted(metadata.tables)}"
        raise ValueError(msg)

    stmt = select(func.max(table.c.id).label("max_id")).with_for_update()
    row = conn.execute(stmt).first()
    if row is None:
        raise IdAllocationError(table_name)

    current = row.max_id
    allocated = 1 if current is None else int(current) + 1
    logger.debug("Allocated id %d for %s", allocated, table_name)
    return allocated
