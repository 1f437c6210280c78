"""Centralized webhook settings using pydantic-settings.

This module provides a single source of truth for all webhook configuration
loaded from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Webhook configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )
    correlation_ids: bool = Field(
        default=True,
        validation_alias="CORRELATION_IDS",
        description="Enable correlation IDs in logs for request tracing",
    )
    webhook_log_level: str = Field(
        default="INFO",
        validation_alias="WEBHOOK_LOG_LEVEL",
        description="Log level for the admission_webhook loggers",
    )
    decision_log_level: str = Field(
        default="DEBUG",
        validation_alias="ADMISSION_DECISION_LOG_LEVEL",
        description="Log level used when a request is admitted",
    )

    # Metrics
    metrics_enabled: bool = Field(
        default=True,
        validation_alias="ADMISSION_METRICS_ENABLED",
        description="Record Prometheus metrics for admission decisions",
    )


# Global settings instance - initialized once at module import
settings = Settings()
