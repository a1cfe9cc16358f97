"""Root CLI group for mailctl with global flags and command registration."""

from __future__ import annotations

import click

from mailctl import __version__
from mailctl.commands import register_commands
from mailctl.commands._base import MailGroup, usage_for
from mailctl.commands._context import AppContext
from mailctl.config.settings import MailSettings


@click.group(
    "mailctl",
    cls=MailGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "-help", "--help"]},
)
@click.version_option(version=__version__, prog_name="mailctl")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mailctl: manage mail users and aliases in the mail server database."""
    settings = MailSettings.from_cli(
        config_path=config_path,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(usage_for(ctx))


register_commands(cli)
