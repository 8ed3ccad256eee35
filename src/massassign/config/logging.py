"""structlog configuration for massassign.

Library modules only call ``logging.getLogger(__name__)``; nothing is
emitted until an application calls :func:`configure_logging`. Once
configured, stdlib records pass through the structlog processor chain,
picking up any context bound with ``structlog.contextvars`` (the
assignment service binds ``op`` and ``target``).

Output goes to stderr, console-rendered by default or as JSON lines.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from massassign.config.settings import MassAssignSettings

LOGGER_NAME = "massassign"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single stderr handler rendering through structlog.

    Safe to call repeatedly: the root handler list is replaced, not appended.

    Args:
        verbose: DEBUG for the ``massassign`` logger. When False, WARNING+.
        log_json: JSON lines instead of console output.
    """
    shared = _shared_processors()

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
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_from_settings(settings: MassAssignSettings) -> None:
    """Apply the ``verbose`` / ``log_json`` flags of *settings*."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
