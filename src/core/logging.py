"""Structured logging configuration using structlog.

Development runs get pretty-printed console output; production runs emit
JSON lines for log aggregation. Widget instances tag their lines with a
``widget_id`` through ``widget_log_context`` so several carousels on one
page can be told apart.

Usage:
    from src.core.logging import get_logger, configure_logging

    # At application startup
    configure_logging(development=True)  # or False for production

    # In modules
    logger = get_logger(__name__)
    logger.info("slide_changed", index=2, total=5)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from os import getenv
from typing import cast

import structlog
from structlog.types import Processor

# stdlib logger that every widget module logs under
WIDGET_LOGGER_NAME = "src.clients.widget"

# Held at WARNING; their INFO/DEBUG output is connection and loop chatter
QUIET_LOGGERS = ("aiohttp", "asyncio")


def _level_from(name: str | None, default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
    widget_log_level: str | None = None,
) -> None:
    """Configure structured logging for the gallery widget.

    Args:
        development: If True, use pretty-printed output. If False, use JSON.
                    If None, reads from ENVIRONMENT env var (default: development).
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR).
                  If None, reads from LOG_LEVEL env var (default: INFO).
        widget_log_level: Level for the widget's own loggers, which log every
                  ignored input at DEBUG. If None, reads GALLERY_WIDGET_LOG_LEVEL;
                  when that is unset too the widget follows ``log_level``.
    """
    if development is None:
        env = getenv("ENVIRONMENT", "development").lower()
        development = env != "production"

    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO")
    if widget_log_level is None:
        widget_log_level = getenv("GALLERY_WIDGET_LOG_LEVEL")

    numeric_level = _level_from(log_level, logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if development:
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)
    logging.getLogger(WIDGET_LOGGER_NAME).setLevel(
        _level_from(widget_log_level, logging.NOTSET)
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


@contextmanager
def widget_log_context(widget_id: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with ``widget_id``.

    The previous binding is restored on exit, so nested blocks (a widget
    mounted from inside another widget's handler) unwind cleanly.
    """
    with structlog.contextvars.bound_contextvars(widget_id=widget_id):
        yield
