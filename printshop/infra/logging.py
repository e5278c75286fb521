"""Structured logging for the print shop API.

Events carry key/value context (order numbers, checkout ids, amounts).
Per-request values such as the cart session are bound with
``bind_request_context`` and merged into every event logged while the
request is handled.
"""

import logging
import sys
from decimal import Decimal
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from printshop.config import settings

# Libraries whose INFO output drowns the order and checkout events
QUIET_LOGGERS = ("uvicorn.access", "httpx", "sqlalchemy.engine", "aiosqlite", "asyncpg")


def render_money(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Render Decimal amounts as plain strings ("8.99", not "Decimal('8.99')")."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _level() -> int:
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Configure structlog and route standard logging through stdout.

    JSON lines when ``log_json`` is set outside dev, colored console otherwise.
    """
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        render_money,
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Processor
    if settings.log_json and settings.environment != "dev":
        shared.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level())
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**context: Any) -> None:
    """Attach values to every event logged by the current request."""
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in context.items() if value is not None}
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Logger for a module, optionally pre-bound with context."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
