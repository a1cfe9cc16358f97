"""Subcommand modules for mailctl.

Provides register_commands() which uses deferred imports to keep
``mailctl help`` from importing SQLAlchemy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    from mailctl.commands.aliases import add_alias
    from mailctl.commands.help_cmd import help_cmd
    from mailctl.commands.users import add_user, change_password, remove_user

    cli.add_command(add_user)
    cli.add_command(remove_user)
    cli.add_command(change_password)
    cli.add_command(add_alias)
    cli.add_command(help_cmd)
