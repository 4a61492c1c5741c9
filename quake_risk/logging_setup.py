"""structlog configuration shared by the command-line tools."""

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, json_logs: bool = False, log_level: str = "WARNING") -> None:
    """Route structlog through stdlib logging on stderr.

    Call once at startup. Library modules only do
    `structlog.get_logger(__name__)` and never configure logging themselves.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
