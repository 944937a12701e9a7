"""
Structured logging configuration using structlog.

Every event carries the deployment environment. Request handlers
and library sync runs bind their identifiers (``user_id``,
``run_id``) through context variables, so nested components log
them without passing them around.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import EventDict, Processor, WrappedLogger

from game_backlog.config import get_settings


def _add_environment(_: "WrappedLogger", __: str, event_dict: "EventDict") -> "EventDict":
    event_dict.setdefault("environment", get_settings().environment)
    return event_dict


def _renderer(log_format: str) -> "Processor":
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging() -> None:
    """
    Configure structlog and the standard library root logger.

    Logs go to stderr; stdout is reserved for CLI output.
    """
    settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_environment,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.logging.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors.append(_renderer(settings.logging.format))

    level = logging.getLevelName(settings.logging.level)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a logger with ``initial_context`` bound.

    Example:
        >>> logger = get_logger(__name__, component="sync")
        >>> logger.info("Sync skipped", app_id=730)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """
    Bind ``values`` to every event logged inside the block.

    None values are left out.

    Example:
        >>> with log_context(user_id="user-1"):
        ...     service.set_status("user-1", 730, "playing")
    """
    bound = {key: value for key, value in values.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield
