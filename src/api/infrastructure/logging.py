"""Structlog configuration for the application.

Probe events are rendered as colored console lines during development and
as one JSON object per line in production. Standard library loggers
(uvicorn, SQLAlchemy, Alembic) are routed to the same stream.
"""

import logging
import os
import sys

import structlog

_NOISY_LOGGERS = ("sqlalchemy.engine", "asyncio")


def _use_colors() -> bool:
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(debug: bool = False) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        debug: Emit debug-level events (repository lookups, snapshot reloads)
    """
    min_level = logging.DEBUG if debug else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if _use_colors():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s %(message)s",
        stream=sys.stdout,
        level=min_level,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)
