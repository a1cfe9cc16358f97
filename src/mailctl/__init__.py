"""mailctl: administration CLI for a virtual-mailbox database."""

__version__ = "0.1.0"
