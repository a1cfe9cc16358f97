"""Commands: add-user, remove-user, change-password."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mailctl.commands._base import MailCommand
from mailctl.commands._options import connection_options, name_option, password_option
from mailctl.domain.types import CommandName

if TYPE_CHECKING:
    from mailctl.commands._context import AppContext
    from mailctl.domain.requests import MailRequest
    from mailctl.infrastructure.database.engine import MailDatabase
    from mailctl.services.accounts import AccountService
    from mailctl.services.result import ServiceResult


def _accounts(app: AppContext, db: MailDatabase, request: MailRequest) -> AccountService:
    from mailctl.services.accounts import AccountService

    return AccountService(db, request, id_retries=app.settings.mail.id_retries)


@click.command(
    "add-user",
    cls=MailCommand,
    examples="""\
  mailctl add-user -name user1 -password pass123
  mailctl add-user -name user1@example.org -password pass123
  mailctl add-user -name user1 -password pass123 -domain example.org -host db.internal""",
)
@name_option
@password_option
@connection_options
@click.pass_obj
def add_user(app: AppContext, **flags: str | int | None) -> None:
    """Add a new mail user."""

    def handler(db: MailDatabase, request: MailRequest) -> ServiceResult:
        return _accounts(app, db, request).add_user()

    app.run(app.build_request(CommandName.ADD_USER, **flags), handler)


@click.command(
    "remove-user",
    cls=MailCommand,
    examples="""\
  mailctl remove-user -name user1
  mailctl remove-user -name user1 -domain example.org""",
)
@name_option
@connection_options
@click.pass_obj
def remove_user(app: AppContext, **flags: str | int | None) -> None:
    """Remove an existing mail user."""

    def handler(db: MailDatabase, request: MailRequest) -> ServiceResult:
        return _accounts(app, db, request).remove_user()

    app.run(app.build_request(CommandName.REMOVE_USER, **flags), handler)


@click.command(
    "change-password",
    cls=MailCommand,
    examples="""\
  mailctl change-password -name user1 -password newpass
  mailctl change-password -name user1 -password newpass -domain example.org""",
)
@name_option
@password_option
@connection_options
@click.pass_obj
def change_password(app: AppContext, **flags: str | int | None) -> None:
    """Change a user's password."""

    def handler(db: MailDatabase, request: MailRequest) -> ServiceResult:
        return _accounts(app, db, request).change_password()

    app.run(app.build_request(CommandName.CHANGE_PASSWORD, **flags), handler)
