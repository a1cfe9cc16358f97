"""Shared pytest fixtures for mailctl tests.

Database tests run against a file-backed SQLite database created with
the same table definitions the gateway queries, seeded with the domain
``{id: 1, name: "test.com"}``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, insert
from sqlalchemy.engine import URL

from mailctl.domain.requests import MailRequest
from mailctl.domain.types import CommandName
from mailctl.infrastructure.database.engine import MailDatabase
from mailctl.infrastructure.database.schema import metadata, virtual_domains


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """SQLite mail database with the three mail tables and ``test.com`` seeded."""
    path = tmp_path / "mailserver.db"
    engine = create_engine(f"sqlite:///{path}")
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(insert(virtual_domains).values(id=1, name="test.com"))
    engine.dispose()
    return path


@pytest.fixture
def db_url(db_path: Path) -> URL:
    return URL.create("sqlite", database=str(db_path))


@pytest.fixture
def database(db_url: URL) -> Iterator[MailDatabase]:
    """Connected gateway on the seeded SQLite database."""
    db = MailDatabase(db_url).connect()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_request() -> Callable[..., MailRequest]:
    """Factory for requests with ``test.com`` as the default domain."""

    def _make(command: CommandName | str, **kwargs: Any) -> MailRequest:
        kwargs.setdefault("domain", "test.com")
        return MailRequest(command=command, **kwargs)

    return _make


@pytest.fixture
def _sqlite_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the CLI at SQLite (``-database`` is the file path) in an isolated CWD.

    Use via ``@pytest.mark.usefixtures("_sqlite_cli")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MAILCTL_CONFIG", raising=False)
    monkeypatch.setenv("MAILCTL_DB__DRIVER", "sqlite")


@pytest.fixture(autouse=True)
def _restore_global_state() -> Iterator[None]:
    """Undo the logging changes made by ``AppContext`` during CLI tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    mail = logging.getLogger("mailctl")
    mail_level = mail.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    mail.setLevel(mail_level)
