"""structlog setup for mailctl.

stdout carries exactly one result line per command, so every log record
is routed to stderr.  Human mode renders with structlog's console
renderer; ``--log-json`` emits one JSON object per line.

Plaintext passwords reach this process as ``-password`` values and as
bound statement parameters.  :func:`redact_secrets` masks them in any
event, and the driver loggers that echo parameters stay at WARNING even
under ``--verbose``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

SECRET_KEYS = frozenset({"password", "new_password", "db_password"})
REDACTED = "***"
DRIVER_LOGGERS = ("sqlalchemy", "pymysql")


def redact_secrets(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """structlog processor: mask values stored under :data:`SECRET_KEYS`."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route mailctl and library logs to stderr through structlog.

    Safe to call more than once; the root handler is replaced, not stacked.

    Args:
        verbose: ``mailctl.*`` at DEBUG instead of WARNING.
        log_json: JSON lines instead of the console renderer.
    """
    shared = _processors()
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("mailctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
