"""BaseService: shared foundation for mailctl services.

Every service receives a connected :class:`MailDatabase` and the
per-invocation :class:`MailRequest`.  Services own their transaction
boundaries via ``self._db.transaction()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from mailctl.infrastructure.database.counters import next_id
from mailctl.infrastructure.database.domains import resolve_domain_id
from mailctl.infrastructure.database.engine import driver_message
from mailctl.services.result import ServiceResult

if TYPE_CHECKING:
    from sqlalchemy import Table

    from mailctl.domain.requests import MailRequest
    from mailctl.errors import MailctlError
    from mailctl.infrastructure.database.engine import MailDatabase

logger = logging.getLogger(__name__)


def _never() -> bool:
    return False


class BaseService:
    """Base for the account and alias services.

    Usage::

        class AccountService(BaseService):
            def remove_user(self) -> ServiceResult:
                rows = self._db.execute(delete(virtual_users).where(...))
                ...
    """

    def __init__(self, db: MailDatabase, request: MailRequest, *, id_retries: int = 3) -> None:
        self._db = db
        self._request = request
        self._id_retries = id_retries

    def _insert_with_next_id(
        self,
        table: Table,
        domain: str | None,
        values: dict[str, Any],
        *,
        is_duplicate: Callable[[], bool] = _never,
    ) -> tuple[int, int]:
        """Resolve *domain*, allocate the next id of *table*, and insert one row.

        All three steps share one transaction.  A unique-key failure is
        retried with a fresh id up to ``id_retries`` times, unless
        *is_duplicate* reports that the row itself already exists.

        Returns:
            ``(new_id, domain_id)``.

        Raises:
            DomainLookupError: If *domain* is empty or unknown.
            IdAllocationError: If ``MAX(id)`` yields no row.
            IntegrityError: When retries are exhausted or the row is a duplicate.
        """
        attempt = 1
        while True:
            try:
                with self._db.transaction() as conn:
                    domain_id = resolve_domain_id(conn, domain)
                    new_id = next_id(conn, table.name)
                    conn.execute(insert(table).values(id=new_id, domain_id=domain_id, **values))
            except IntegrityError:
                if attempt >= self._id_retries or is_duplicate():
                    raise
                logger.warning(
                    "Id %d in %s was taken concurrently, retrying (%d/%d)",
                    new_id,
                    table.name,
                    attempt,
                    self._id_retries,
                )
                attempt += 1
                continue
            return new_id, domain_id

    @staticmethod
    def _from_error(op: str, exc: MailctlError) -> ServiceResult:
        """Turn a lookup/allocation error into a failed result."""
        logger.debug("%s failed: %s", op, exc.message)
        return ServiceResult.failure(op, exc.code, exc.message)

    @staticmethod
    def _from_driver_error(op: str, exc: SQLAlchemyError) -> ServiceResult:
        """Turn a statement failure into a failed result with the driver's text."""
        message = driver_message(exc)
        logger.warning("%s: statement failed: %s", op, message)
        return ServiceResult.failure(op, "DATABASE_ERROR", message)
