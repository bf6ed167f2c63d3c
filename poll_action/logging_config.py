"""Structlog configuration for the poll action service."""

from __future__ import annotations

import logging

import structlog
from structlog.typing import EventDict, WrappedLogger


SERVICE_NAME = "poll-action"
DEFAULT_LEVEL = "INFO"


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    """Configure structlog to emit JSON lines at *level* and above.

    Every event is tagged with the service name; events below the configured
    level are dropped before rendering.
    """

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            _add_service,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=numeric_level, format="%(message)s")
    logging.getLogger().setLevel(numeric_level)
