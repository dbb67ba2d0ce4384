"""Tests for structlog configuration."""

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest
import structlog

from error_response.logging import (
    LoggingSettings,
    _add_timestamp,
    _shared_processors,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo configure_logging() so other tests see structlog's defaults."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_timestamp_is_utc_iso8601() -> None:
    event_dict = _add_timestamp(None, "error", {"event": "internal_server_error"})

    stamp = datetime.fromisoformat(event_dict["timestamp"])
    assert stamp.utcoffset() is not None
    assert stamp.utcoffset().total_seconds() == 0  # type: ignore[union-attr]


@pytest.mark.parametrize("log_format", ["json", "console"])
def test_configure_logging_installs_structured_handler(
    restore_logging: None, log_format: str
) -> None:
    configure_logging(LoggingSettings(LOG_LEVEL="WARNING", LOG_FORMAT=log_format))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(
        isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        for handler in root.handlers
    )


def test_get_logger_returns_structlog_logger() -> None:
    logger = get_logger("error_response.tests")

    assert callable(logger.error)


def test_shared_processors_merge_request_context_first() -> None:
    processors = _shared_processors()

    assert processors[0] is structlog.contextvars.merge_contextvars
    assert _add_timestamp in processors
