"""Command: add-alias."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mailctl.commands._base import MailCommand
from mailctl.commands._options import connection_options, destination_option, source_option
from mailctl.domain.types import CommandName

if TYPE_CHECKING:
    from mailctl.commands._context import AppContext
    from mailctl.domain.requests import MailRequest
    from mailctl.infrastructure.database.engine import MailDatabase
    from mailctl.services.result import ServiceResult


@click.command(
    "add-alias",
    cls=MailCommand,
    examples="""\
  mailctl add-alias -source alias@example.org -destination user@example.org
  mailctl add-alias -source postmaster -destination admin@elsewhere.net -domain example.org""",
)
@source_option
@destination_option
@connection_options
@click.pass_obj
def add_alias(app: AppContext, **flags: str | int | None) -> None:
    """Add a mail alias (forward SOURCE to DESTINATION)."""

    def handler(db: MailDatabase, request: MailRequest) -> ServiceResult:
        from mailctl.services.aliases import AliasService

        service = AliasService(db, request, id_retries=app.settings.mail.id_retries)
        return service.add_alias()

    app.run(app.build_request(CommandName.ADD_ALIAS, **flags), handler)
