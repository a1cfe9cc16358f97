"""Locate the mailctl.toml that holds database credentials.

Lookup order:

1. ``$MAILCTL_CONFIG``, when set (a missing file there is not an error,
   but nothing else is tried).
2. ``mailctl.toml`` in the working directory or any parent.
3. The system-wide :data:`SYSTEM_CONFIG`, where a mail host keeps the
   administrative login shared by every operator.

The ``-c/--config`` flag skips all of this (see :meth:`MailSettings.from_cli`).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "mailctl.toml"
CONFIG_ENV_VAR = "MAILCTL_CONFIG"
SYSTEM_CONFIG = Path("/etc/mailctl") / CONFIG_FILENAME

logger = logging.getLogger(__name__)


def _walk_up(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current / CONFIG_FILENAME
    for parent in current.parents:
        yield parent / CONFIG_FILENAME


def find_config(start: Path | None = None, *, system_path: Path | None = SYSTEM_CONFIG) -> Path | None:
    """Return the config file mailctl should read, or None to run on defaults.

    Args:
        start: Directory the walk-up begins in (default: cwd).
        system_path: Last-resort location; None disables it.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.is_file():
            return path
        logger.warning("%s points at %s, which does not exist", CONFIG_ENV_VAR, path)
        return None

    for candidate in _walk_up(start or Path.cwd()):
        if candidate.is_file():
            return candidate

    if system_path is not None and system_path.is_file():
        return system_path
    return None
