"""SQLAlchemy Core table definitions for the mail server database.

The schema is owned by the mail transfer agent's setup, not by mailctl.
These definitions mirror it exactly so queries can be built with Core
constructs; mailctl never issues DDL against a live server.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table

metadata = MetaData()

virtual_domains = Table(
    "virtual_domains",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", String(50), nullable=False),
)

virtual_users = Table(
    "virtual_users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("domain_id", Integer, ForeignKey("virtual_domains.id"), nullable=False),
    Column("password", String(106), nullable=False),  # crypt(3) SHA-512 string
    Column("email", String(120), nullable=False, unique=True),
)

virtual_aliases = Table(
    "virtual_aliases",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("domain_id", Integer, ForeignKey("virtual_domains.id"), nullable=False),
    Column("source", String(100), nullable=False),
    Column("destination", String(100), nullable=False),
)
