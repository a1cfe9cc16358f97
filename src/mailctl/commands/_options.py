"""Shared Click options.

Every option is spelled both ways: single dash (``-name``) for the
historical command line that cron jobs and scripts use, and double dash
(``--name``).  All default to None; :meth:`AppContext.build_request`
fills in configured defaults.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., Any])


def _option(name: str, metavar: str, help_text: str, **kwargs: Any) -> Callable[[_F], _F]:
    return click.option(
        f"-{name}", f"--{name}", name, default=None, metavar=metavar, help=help_text, **kwargs
    )


def connection_options(func: _F) -> _F:
    """Attach ``-host``, ``-database``, ``-domain`` and ``-port``."""
    decorators = [
        _option("host", "HOSTNAME", "Database hostname."),
        _option("database", "DATABASE", "Database name."),
        _option("domain", "DOMAIN", "Mail domain."),
        _option("port", "PORT", "Database port (not used for localhost).", type=int),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


name_option = _option("name", "USERNAME", "Username, optionally user@domain.")
password_option = _option("password", "PASSWORD", "Password.")
source_option = _option("source", "EMAIL", "Source email address.")
destination_option = _option("destination", "EMAIL", "Destination email address.")
