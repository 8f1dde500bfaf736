"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, Processor

from src.core.config import get_settings

settings = get_settings()

# Longest string value written to a log line (payloads are logged on failure)
MAX_LOGGED_VALUE_LENGTH = 4000
TRUNCATION_MARKER = "...(truncated)"


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log entries."""
    event_dict["app"] = settings.app_name
    event_dict["env"] = settings.app_env
    return event_dict


def truncate_long_values(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Shorten oversized string fields such as logged webhook payloads."""
    for key, value in event_dict.items():
        if isinstance(value, str) and len(value) > MAX_LOGGED_VALUE_LENGTH:
            event_dict[key] = value[: MAX_LOGGED_VALUE_LENGTH - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER
    return event_dict


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Level name overriding the configured LOG_LEVEL
    """
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        truncate_long_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.debug:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,  # type: ignore
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def dispatch_context(**values: Any) -> Any:
    """Bind fields (project id, event family) to log lines emitted inside the block."""
    return structlog.contextvars.bound_contextvars(**values)


setup_logging()
