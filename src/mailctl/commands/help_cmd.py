"""Command: help."""

from __future__ import annotations

import click

from mailctl.commands._base import MailCommand, usage_for


@click.command("help", cls=MailCommand)
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show the usage text."""
    click.echo(usage_for(ctx))
