"""Structured JSON logging for the proxy process."""

from __future__ import annotations

import logging
from typing import Any

import structlog
from structlog.typing import EventDict

SERVICE_NAME = "search-proxy"
REDACTED_KEYS = frozenset({"api_key", "x-subscription-token", "authorization"})


def _service_context(service: str, environment: str | None):
    def processor(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        if environment is not None:
            event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def _redact_secrets(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
    """Mask credentials, including inside logged upstream header maps."""

    for key, value in list(event_dict.items()):
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = "***"
        elif isinstance(value, dict):
            event_dict[key] = {
                name: "***" if str(name).lower() in REDACTED_KEYS else item
                for name, item in value.items()
            }
    return event_dict


def configure_logging(
    level: int | str = logging.INFO,
    *,
    environment: str | None = None,
    service: str = SERVICE_NAME,
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _service_context(service, environment),
            _redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()

__all__ = ["SERVICE_NAME", "configure_logging", "logger"]
