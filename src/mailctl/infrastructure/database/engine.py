"""Database gateway: one connection per mailctl invocation.

SQLAlchemy Core (not ORM) is used because mailctl is a one-shot CLI
process: parse, connect, run one command, disconnect.  The engine uses
``NullPool`` and the gateway holds exactly one connection, opened by
:meth:`MailDatabase.connect` and released by :meth:`MailDatabase.close`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from mailctl.errors import DatabaseConnectionError
from mailctl.infrastructure.database.hashing import register_sqlite_functions

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection, Executable, Row
    from sqlalchemy.engine import Engine

    from mailctl.config.models import DbConfig

logger = logging.getLogger(__name__)

LOOPBACK_HOST = "localhost"


def build_url(config: DbConfig, *, host: str, database: str, port: int | None) -> URL:
    """Build the connection URL for *host* / *database*.

    The port is only appended for non-loopback hosts, matching how the
    MTA's own lookups reach a local server.  ``config.url`` overrides
    everything; SQLite drivers treat *database* as the file path.
    """
    if config.url:
        return make_url(config.url)

    if config.driver.startswith("sqlite"):
        return URL.create(config.driver, database=database)

    query: dict[str, str] = {}
    if config.unix_socket:
        query["unix_socket"] = config.unix_socket

    return URL.create(
        config.driver,
        username=config.user,
        password=config.password,
        host=host,
        port=port if host != LOOPBACK_HOST and port else None,
        database=database,
        query=query,
    )


def create_db_engine(url: URL) -> Engine:
    """Create an engine for *url* without pooling.

    SQLite connections get the ``encrypt()`` function the salted-hash
    construct compiles to.
    """
    engine = create_engine(url, poolclass=NullPool, echo=False)

    if url.get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def _register_functions(dbapi_conn: Any, _: Any) -> None:
            register_sqlite_functions(dbapi_conn)

    return engine


def driver_message(exc: SQLAlchemyError) -> str:
    """The DBAPI driver's own error text, without SQLAlchemy's decoration."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class MailDatabase:
    """Gateway owning the single connection to the mail database.

    Usage::

        db = MailDatabase(url)
        db.connect()
        try:
            rows = db.execute(delete(virtual_users).where(...))
        finally:
            db.close()

    Every statement runs inside its own transaction unless the caller
    groups several in :meth:`transaction`.
    """

    def __init__(self, url: URL) -> None:
        self._url = url
        self._engine: Engine | None = None
        self._conn: Connection | None = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> Connection:
        if self._conn is None:
            msg = "MailDatabase.connect() must be called before issuing statements"
            raise RuntimeError(msg)
        return self._conn

    def connect(self) -> MailDatabase:
        """Open the connection, verifying the server accepts the login.

        Raises:
            DatabaseConnectionError: carrying the driver's error text.
        """
        if self._conn is not None:
            return self
        logger.debug(
            "Connecting to %s",
            self._url.render_as_string(hide_password=True),
        )
        self._engine = create_db_engine(self._url)
        try:
            self._conn = self._engine.connect()
        except SQLAlchemyError as exc:
            self._engine.dispose()
            self._engine = None
            raise DatabaseConnectionError(
                f"Couldn't connect to database: {driver_message(exc)}"
            ) from exc
        return self

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Run the enclosed statements in one transaction.

        Commits when the block exits normally, rolls back and re-raises
        otherwise.
        """
        conn = self.connection
        with conn.begin():
            yield conn

    def execute(self, statement: Executable, params: dict[str, Any] | None = None) -> int:
        """Execute a data-modifying statement and return the affected-row count."""
        with self.transaction() as conn:
            result = conn.execute(statement, params or {})
        logger.debug("Statement affected %d row(s)", result.rowcount)
        return result.rowcount

    def query_one(
        self, statement: Executable, params: dict[str, Any] | None = None
    ) -> Row[Any] | None:
        """Execute a query and return its first row, or None."""
        with self.transaction() as conn:
            return conn.execute(statement, params or {}).first()

    def close(self) -> None:
        """Release the connection.  Safe to call more than once."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> MailDatabase:
        return self.connect()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
