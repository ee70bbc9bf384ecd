"""Structlog configuration for the application.

Colored console output when attached to a terminal, JSON lines otherwise
so that container log collectors can parse sync and callback events.
"""

import logging
import os
import sys

import structlog


def _resolve_level(level: str | None) -> int:
    """Map a level name (e.g. "debug") to its numeric value, defaulting to INFO."""
    name = (level or os.environ.get("DIRSYNC_LOG_LEVEL", "info")).upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(level: str | None = None) -> None:
    """Configure structlog with appropriate processors.

    FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker).

    Args:
        level: Minimum log level name. Falls back to DIRSYNC_LOG_LEVEL, then INFO.
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
