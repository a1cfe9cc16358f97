"""MailRequest: the immutable per-invocation request, and its validation.

The dispatcher builds exactly one :class:`MailRequest` from the parsed
flags and hands it to the service layer.  Handlers never look at global
state; everything they need is on the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel

from mailctl.domain.types import CommandName

NAME_REQUIRED = "-name <username> is required"
NAME_TOO_MANY_AT = "-name <username> must not contain more than one '@'"
PASSWORD_REQUIRED = "-password <password> is required"
SOURCE_REQUIRED = "-source <email> is required"
DESTINATION_REQUIRED = "-destination <email> is required"


class MailRequest(BaseModel):
    """Parsed flag values for one command invocation."""

    model_config = {"frozen": True}

    command: CommandName
    host: str = "localhost"
    database: str = "mailserver"
    domain: str = ""
    port: int | None = 3306
    name: str | None = None
    password: str | None = None
    source: str | None = None
    destination: str | None = None


@dataclass
class ValidationResult:
    """Outcome of checking a request's required parameters."""

    valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """The first violation, which is the one reported to the user."""
        return self.errors[0] if self.errors else ""


def validate_request(request: MailRequest) -> ValidationResult:
    """Check the required parameters of *request.command*.

    Violations are collected in a fixed order so the first entry of
    ``errors`` is always the message the CLI prints:

    * add-user, change-password: name present, at most one ``@``, password present
    * remove-user: name present
    * add-alias: source present, destination present
    * help: nothing
    """
    errors: list[str] = []
    command = request.command

    if command in (CommandName.ADD_USER, CommandName.CHANGE_PASSWORD):
        if not request.name:
            errors.append(NAME_REQUIRED)
        elif request.name.count("@") > 1:
            errors.append(NAME_TOO_MANY_AT)
        if not request.password:
            errors.append(PASSWORD_REQUIRED)
    elif command is CommandName.REMOVE_USER:
        if not request.name:
            errors.append(NAME_REQUIRED)
    elif command is CommandName.ADD_ALIAS:
        if not request.source:
            errors.append(SOURCE_REQUIRED)
        if not request.destination:
            errors.append(DESTINATION_REQUIRED)

    return ValidationResult(valid=not errors, errors=errors)
