"""Structured logging configuration for vouch.

This module provides structlog-based logging with:
- JSON output (when env var VOUCH_LOG_FORMAT=json)
- Pretty console output (default)

vouch is a library, so nothing is configured on import. Loggers returned by
``get_logger`` write through the standard library ``logging`` module, and
the ``vouch`` logger carries a ``NullHandler``: until the host application
configures logging, vouch's debug events go nowhere. Applications that want
them call ``configure_logging`` once at startup.

Usage:
    from vouch.logging import get_logger, configure_logging

    configure_logging()

    log = get_logger(__name__)
    log.debug("condition_failed", what="gte", actual=42)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

# Environment variable for log format
LOG_FORMAT_ENV_VAR = "VOUCH_LOG_FORMAT"

# Environment variable for log level
LOG_LEVEL_ENV_VAR = "VOUCH_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"

ROOT_LOGGER_NAME = "vouch"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def _get_log_level() -> int:
    """Get the log level from environment or default.

    Returns:
        Logging level constant (e.g., logging.WARNING).
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.WARNING)
    return level if isinstance(level, int) else logging.WARNING


def _is_json_output() -> bool:
    """Check if JSON output is enabled."""
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Get processors shared between stdlib and structlog."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_development_renderers() -> list[Processor]:
    return [
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def _get_production_renderers() -> list[Processor]:
    return [
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the root logger for the application.

    Events are rendered once, by the root handler's formatter, so vouch's
    structlog events and plain stdlib records share one output format.
    Subsequent calls reconfigure logging.

    Args:
        force_json: Force JSON output regardless of environment variable.
        level: Override log level. If None, reads from VOUCH_LOG_LEVEL env var.

    Example:
        configure_logging()
        configure_logging(force_json=True)
        configure_logging(level=logging.DEBUG)
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    renderers = _get_production_renderers() if use_json else _get_development_renderers()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *renderers,
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )

    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by a stdlib logger.

    Before ``configure_logging`` runs, events pass through stdlib level
    filtering and the ``vouch`` NullHandler, never straight to stdout.

    Args:
        name: Logger name. Defaults to ``"vouch"``.

    Returns:
        A bound structlog logger.

    Example:
        log = get_logger(__name__)
        log.debug("block_dropped", expression="funName")
    """
    log: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return log


def bind_context(**context: Any) -> None:
    """Bind context variables that will be included in all log messages.

    Example:
        bind_context(request_id="abc-456")
        log.info("event")  # Includes request_id
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
