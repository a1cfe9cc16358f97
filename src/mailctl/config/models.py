"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``mailctl.toml`` only carries
overrides.  A typical deployment needs ``[db] password`` and
``[mail] default_domain``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DbConfig(BaseModel):
    """[db] section: where the mail database lives and how to log in."""

    model_config = {"frozen": True}

    host: str = "localhost"
    name: str = "mailserver"
    port: int = 3306
    user: str = "root"
    password: str | None = None
    driver: str = "mysql+pymysql"
    unix_socket: str | None = None
    url: str | None = None


class MailConfig(BaseModel):
    """[mail] section."""

    model_config = {"frozen": True}

    default_domain: str = "example.com"
    id_retries: int = Field(default=3, ge=1)
