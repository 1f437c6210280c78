"""
Structured logging utilities for the admission webhook.

This module provides correlation ID tracking and structured log formatting.
While a request is handled its uid is used as the correlation ID, so every
log line produced for one admission request can be grouped together.
"""

import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from admission_webhook.settings import Settings

# Context variable for tracking correlation IDs across threads and tasks
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

STRUCTURED_FIELDS = (
    "resource_kind",
    "resource_name",
    "namespace",
    "operation",
    "request_uid",
    "allowed",
    "http_status",
    "reason",
    "warning_count",
    "error_type",
    "error_category",
    "dry_run",
    "duration",
)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Add correlation ID to the log record.

        Args:
            record: The log record to process

        Returns:
            True to allow the record to be processed
        """
        current_correlation_id = correlation_id.get()
        if not current_correlation_id:
            current_correlation_id = generate_correlation_id()
            correlation_id.set(current_correlation_id)

        record.correlation_id = current_correlation_id
        return True


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for logs with correlation ID support.

    Formats log records as structured JSON for better parsing and analysis
    in production monitoring systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields are set as record attributes by logger.*(extra=...)
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data)


def generate_correlation_id() -> str:
    """
    Generate a new correlation ID.

    Returns:
        Unique correlation ID string
    """
    return str(uuid.uuid4())[:8]  # Short 8-character ID for readability


def set_correlation_id(corr_id: str) -> str:
    """Set the correlation ID for the current context and return it."""
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str:
    """Get the current correlation ID, or empty string if none set."""
    return correlation_id.get("")


@contextmanager
def correlation_scope(corr_id: str | None = None) -> Iterator[str]:
    """
    Use ``corr_id`` (or a fresh ID) as correlation ID for the enclosed block.

    The previous value is restored on exit, so nested or concurrent requests
    never see each other's IDs.
    """
    token = correlation_id.set(corr_id or generate_correlation_id())
    try:
        yield correlation_id.get()
    finally:
        correlation_id.reset(token)


def setup_structured_logging(
    log_level: str = "INFO",
    enable_json_formatting: bool = True,
    correlation_id_enabled: bool = True,
    webhook_log_level: str = "INFO",
) -> None:
    """
    Set up structured logging for the webhook.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json_formatting: Whether to use JSON formatting
        correlation_id_enabled: Whether to enable correlation ID tracking
        webhook_log_level: Log level for the admission_webhook loggers
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()

    if enable_json_formatting:
        formatter = StructuredFormatter()
    elif correlation_id_enabled:
        formatter = logging.Formatter(
            "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)

    if correlation_id_enabled:
        handler.addFilter(CorrelationIDFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Third-party libraries
    logging.getLogger("kopf").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.server").setLevel(logging.WARNING)

    webhook_level = getattr(logging, webhook_log_level.upper(), logging.INFO)
    logging.getLogger("admission_webhook").setLevel(webhook_level)


def configure_logging(settings: "Settings") -> None:
    """Set up structured logging from webhook settings."""
    setup_structured_logging(
        log_level=settings.log_level,
        enable_json_formatting=settings.json_logs,
        correlation_id_enabled=settings.correlation_ids,
        webhook_log_level=settings.webhook_log_level,
    )
