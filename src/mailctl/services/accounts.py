"""AccountService: create, delete, and re-password virtual mailbox users.

Each command maps to a single data-modifying statement against
``virtual_users``; the password column is always written through the
database's salted-hash primitive.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from mailctl.domain.addresses import compose_email
from mailctl.errors import MailctlError
from mailctl.infrastructure.database.engine import driver_message
from mailctl.infrastructure.database.hashing import SaltedHash
from mailctl.infrastructure.database.schema import virtual_users
from mailctl.services.base import BaseService
from mailctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """Handles the add-user, remove-user and change-password commands."""

    def _email(self) -> tuple[str, str]:
        return compose_email(self._request.name or "", self._request.domain)

    def _user_exists(self, email: str) -> bool:
        row = self._db.query_one(select(virtual_users.c.id).where(virtual_users.c.email == email))
        return row is not None

    def _is_duplicate(self, email: str) -> bool:
        """Whether *email* is already stored; False when the lookup itself fails."""
        try:
            return self._user_exists(email)
        except SQLAlchemyError as exc:
            logger.warning("Duplicate check for %s failed: %s", email, driver_message(exc))
            return False

    def add_user(self) -> ServiceResult:
        """Insert a new mailbox.

        The domain is taken from ``-name`` when it contains one
        (``bob@example.org``), otherwise from ``-domain``.
        """
        op = "add_user"
        email, domain = self._email()
        warnings: list[str] = []
        if domain != self._request.domain:
            warnings.append(f"Using domain {domain} from -name instead of {self._request.domain}")

        try:
            new_id, domain_id = self._insert_with_next_id(
                virtual_users,
                domain,
                {"password": SaltedHash(self._request.password), "email": email},
                is_duplicate=lambda: self._is_duplicate(email),
            )
        except MailctlError as exc:
            return self._from_error(op, exc)
        except IntegrityError as exc:
            if self._is_duplicate(email):
                return ServiceResult.failure(
                    op, "ALREADY_EXISTS", f"User {email} already exists", detail={"email": email}
                )
            return self._from_driver_error(op, exc)
        except SQLAlchemyError as exc:
            return self._from_driver_error(op, exc)

        logger.debug("Created user %s with id %d", email, new_id)
        return ServiceResult(
            ok=True,
            op=op,
            message=f"User {email} added successfully",
            data={"id": new_id, "domain_id": domain_id, "email": email},
            warnings=warnings,
        )

    def remove_user(self) -> ServiceResult:
        """Delete the mailbox matching the composed email exactly."""
        op = "remove_user"
        email, _ = self._email()

        try:
            rows = self._db.execute(delete(virtual_users).where(virtual_users.c.email == email))
        except SQLAlchemyError as exc:
            return self._from_driver_error(op, exc)

        if rows == 0:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"User {email} not found", detail={"email": email}
            )
        return ServiceResult(
            ok=True,
            op=op,
            message=f"User {email} removed successfully",
            data={"email": email},
        )

    def change_password(self) -> ServiceResult:
        op = "change_password"
        email, _ = self._email()

        stmt = (
            update(virtual_users)
            .where(virtual_users.c.email == email)
            .values(password=SaltedHash(self._request.password))
        )
        try:
            rows = self._db.execute(stmt)
        except SQLAlchemyError as exc:
            return self._from_driver_error(op, exc)

        if rows == 0:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"User {email} not found", detail={"email": email}
            )
        return ServiceResult(
            ok=True,
            op=op,
            message=f"Password for user {email} changed successfully",
            data={"email": email},
        )
