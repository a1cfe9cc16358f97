"""Allow ``python -m mailctl``."""

from mailctl.cli import cli

if __name__ == "__main__":
    cli()
