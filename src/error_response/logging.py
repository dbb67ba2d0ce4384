"""Structured logging configuration.

Diagnostic records for server faults go through structlog with stdlib
integration. Request-scoped context (request_id, method, path) bound by
RequestIDMiddleware is merged into every record via structlog.contextvars.

Nothing here runs at import time: applications call configure_logging()
once at startup. Until then structlog's defaults apply.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class LoggingSettings(BaseSettings):
    """Logging settings from environment variables."""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _shared_processors() -> list[Any]:
    """Processors applied to structlog and plain stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,  # request_id, method, path
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.processors.format_exc_info,
    ]


def configure_logging(settings: LoggingSettings) -> None:
    """Route structlog through the root logger and render to stdout.

    Call once at application startup. Records from stdlib loggers (uvicorn,
    starlette) get the same fields and renderer as internal_server_error.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = {
        "()": structlog.stdlib.ProcessorFormatter,
        "processor": _renderer(settings.log_format),
        "foreign_pre_chain": shared,
    }
    handler = {"class": "logging.StreamHandler", "formatter": "structured", "stream": sys.stdout}
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"structured": formatter},
            "handlers": {"stdout": handler},
            "root": {"handlers": ["stdout"], "level": settings.log_level},
        }
    )


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger that renders with automatic context binding.

    Example:
        logger = get_logger(__name__)
        logger.error("internal_server_error", error_message="db write failed")
        # Output: {"event": "internal_server_error", "error_message": "db write failed", ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
