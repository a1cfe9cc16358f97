"""Static usage text shown by ``help``, ``-help`` and unknown commands."""

from __future__ import annotations

USAGE_TEMPLATE = """\
Usage: {prog} <command> [options]

Commands:
  add-user        - Add a new mail user
  remove-user     - Remove an existing mail user
  change-password - Change a user's password
  add-alias       - Add a mail alias
  help            - Show this help message

Common Options:
  -host <hostname>     - Database hostname (default: {host})
  -database <database> - Database name (default: {database})
  -domain <domain>     - Mail domain (default: {domain})
  -port <port>         - Database port, ignored for localhost (default: {port})

Command-specific Options:
  add-user, change-password, remove-user:
    -name <username>     - Username, optionally user@domain
    -password <password> - Password (only for add-user, change-password)

  add-alias:
    -source <email>      - Source email address
    -destination <email> - Destination email address

Global Options (before the command):
  -v, --verbose        - Debug logging to stderr
  --log-json           - JSON log lines on stderr
  -c, --config <path>  - Use this mailctl.toml

Examples:
  {prog} add-user -name user1 -password pass123
  {prog} remove-user -name user1
  {prog} change-password -name user1 -password newpass
  {prog} add-alias -source alias@domain.com -destination user@domain.com"""


def render_usage(
    *,
    prog: str = "mailctl",
    host: str = "localhost",
    database: str = "mailserver",
    domain: str = "example.com",
    port: int = 3306,
) -> str:
    """Fill the usage text with the effective defaults."""
    return USAGE_TEMPLATE.format(prog=prog, host=host, database=database, domain=domain, port=port)
