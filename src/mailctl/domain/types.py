"""Command names recognized by the dispatcher."""

from __future__ import annotations

from enum import StrEnum


class CommandName(StrEnum):
    """Every command the CLI dispatches."""

    ADD_USER = "add-user"
    REMOVE_USER = "remove-user"
    CHANGE_PASSWORD = "change-password"
    ADD_ALIAS = "add-alias"
    HELP = "help"
