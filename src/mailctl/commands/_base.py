"""Custom Click base classes.

``MailCommand`` accepts an ``examples`` parameter: when ``--examples`` is
passed the command prints usage examples and exits, keeping ``--help``
concise.  ``MailGroup`` replaces Click's generated root help with the
static usage text and turns an unknown command into
``Unknown command: <cmd>`` plus usage, exit status 1.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


def usage_for(ctx: click.Context) -> str:
    """Static usage text with the defaults in effect for this invocation.

    Root-level help and command resolution run before the root callback
    has built the :class:`AppContext`, so settings are loaded here when
    it does not exist yet.
    """
    from mailctl.commands._context import AppContext
    from mailctl.config.settings import MailSettings
    from mailctl.output.usage import render_usage

    root = ctx.find_root()
    prog = root.info_name or "mailctl"
    if isinstance(root.obj, AppContext):
        settings = root.obj.settings
    else:
        settings = MailSettings.from_cli(config_path=root.params.get("config_path"))
    return render_usage(
        prog=prog,
        host=settings.db.host,
        database=settings.db.name,
        domain=settings.mail.default_domain,
        port=settings.db.port,
    )


class MailCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class MailGroup(click.Group):
    """Root group: static usage help and the ``Unknown command`` contract."""

    command_class = MailCommand

    def get_help(self, ctx: click.Context) -> str:
        return usage_for(ctx)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        cmd_name = args[0]
        if (
            self.get_command(ctx, cmd_name) is None
            and not cmd_name.startswith("-")
            and not ctx.resilient_parsing
        ):
            click.echo(f"Unknown command: {cmd_name}")
            click.echo(usage_for(ctx))
            ctx.exit(1)
        return super().resolve_command(ctx, args)
