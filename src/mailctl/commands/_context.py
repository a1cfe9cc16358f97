"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Drives the per-command lifecycle
(validate, connect, execute, emit) and owns the single database
connection, which the root group closes exactly once on exit.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from mailctl.domain.requests import MailRequest, validate_request
from mailctl.output.formatters import format_result, format_warning

if TYPE_CHECKING:
    from mailctl.config.settings import MailSettings
    from mailctl.domain.types import CommandName
    from mailctl.infrastructure.database.engine import MailDatabase
    from mailctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

Handler = Callable[["MailDatabase", MailRequest], "ServiceResult"]


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The database is only
    opened by :meth:`run`, so ``help``, ``--help`` and ``--examples``
    never touch it.
    """

    def __init__(self, settings: MailSettings) -> None:
        self.settings = settings
        self._database: MailDatabase | None = None

        from mailctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def build_request(self, command: CommandName, **flags: Any) -> MailRequest:
        """Build the immutable request, filling unset flags from settings."""
        defaults = {
            "host": self.settings.db.host,
            "database": self.settings.db.name,
            "domain": self.settings.mail.default_domain,
            "port": self.settings.db.port,
        }
        values = {key: value for key, value in flags.items() if value is not None}
        return MailRequest(command=command, **{**defaults, **values})

    def open_database(self, request: MailRequest) -> MailDatabase:
        """Connect to the database named by *request*.

        Raises:
            DatabaseConnectionError: If the server refuses or is unreachable.
        """
        from mailctl.infrastructure.database.engine import MailDatabase, build_url

        url = build_url(
            self.settings.db,
            host=request.host,
            database=request.database,
            port=request.port,
        )
        self._database = MailDatabase(url)
        return self._database.connect()

    def run(self, request: MailRequest, handler: Handler) -> None:
        """Validate *request*, connect, run *handler*, and emit its result."""
        from mailctl.errors import DatabaseConnectionError
        from mailctl.services.result import ServiceResult

        op = request.command.value.replace("-", "_")

        validation = validate_request(request)
        if not validation.valid:
            self.emit(ServiceResult.failure(op, "VALIDATION_FAILED", validation.message))
            return

        try:
            db = self.open_database(request)
        except DatabaseConnectionError as exc:
            logger.debug("Connection failed: %s", exc.message)
            self.emit(ServiceResult.failure(op, exc.code, exc.message))
            return

        self.emit(handler(db, request))

    def emit(self, result: ServiceResult) -> None:
        """Print *result* with correct exit semantics.

        * The message always goes to stdout, success or failure.
        * Warnings go to stderr so they don't pollute piped output.
        * Failure exits with code 1.
        """
        color = sys.stdout.isatty()
        click.echo(format_result(result, color=color))
        for warning in result.warnings:
            click.echo(format_warning(warning, color=sys.stderr.isatty()), err=True)
        if not result.ok:
            raise SystemExit(1)

    def close(self) -> None:
        """Close the database connection if one was opened."""
        if self._database is not None:
            self._database.close()
            self._database = None
