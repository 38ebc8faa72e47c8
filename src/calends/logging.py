"""Logging configuration for the calends library.

calends logs through structlog at debug level only: parsed selections and
the start, exhaustion and materialization of recurrences. Nothing is shown
until an application lowers the level with :func:`configure_logging`.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Generator

import structlog

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure calends logging.

    Args:
        level: Log level; "DEBUG" shows every calends event.
        json_output: True for JSON lines, False for the colored console

    Raises:
        ValueError: If ``level`` is not a standard logging level name.

    Example:
        from calends import configure_logging

        configure_logging("DEBUG")
    """
    if level.upper() not in _LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(format="%(message)s", level=numeric_level)

    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


@contextmanager
def timed_block(
    logger: structlog.BoundLogger,
    event: str,
) -> Generator[dict[str, Any], None, None]:
    """Log ``event`` at debug level with the elapsed time of the block.

    The yielded dict is merged into the event, so the block can report
    what it produced::

        with timed_block(log, "recurrence_materialized") as fields:
            fields["rows"] = len(items)
    """
    fields: dict[str, Any] = {}
    start = time.perf_counter()
    try:
        yield fields
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(event, elapsed_ms=round(elapsed_ms, 2), **fields)
