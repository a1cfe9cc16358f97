"""Human output for ServiceResult.

mailctl prints exactly one line per command: the result's message,
styled green on success and red on failure when color is enabled.
There is no structured (machine-readable) output mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from mailctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from mailctl.services.result import ServiceResult


def format_result(result: ServiceResult, *, color: bool = False) -> str:
    """Render *result* as its single message line (no trailing newline)."""
    if result.ok:
        message = result.message or result.op
        style = "mail.ok"
    else:
        message = result.message or (result.error.message if result.error else "Unknown error")
        style = "mail.error"

    console = create_console(color=color)
    console.print(f"[{style}]{escape(message)}[/{style}]", soft_wrap=True)
    return get_output(console).rstrip("\n")


def format_warning(warning: str, *, color: bool = False) -> str:
    console = create_console(color=color)
    console.print(f"[mail.warning]WARNING:[/mail.warning] {escape(warning)}", soft_wrap=True)
    return get_output(console).rstrip("\n")
