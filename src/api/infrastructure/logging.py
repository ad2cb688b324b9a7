"""Structlog configuration for the application.

Console output for local development on a terminal, JSON lines everywhere
else so the log shipper can index the probe event fields.
"""

import logging
import os
import sys

import structlog

from infrastructure.settings import Environment


def _use_console_renderer(environment: Environment) -> bool:
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    if force_color:
        return True
    return environment == Environment.DEVELOPMENT and sys.stdout.isatty()


def configure_logging(
    environment: Environment = Environment.DEVELOPMENT,
    level: int = logging.INFO,
) -> None:
    """Configure structlog with appropriate processors.

    Args:
        environment: Deployment environment; production always logs JSON.
        level: Minimum level that reaches the output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if _use_console_renderer(environment):
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
