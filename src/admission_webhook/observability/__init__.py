"""
Observability utilities for the admission webhook.

This module provides metrics and structured logging capabilities for
production monitoring and troubleshooting.
"""

from .logging import configure_logging, setup_structured_logging
from .metrics import MetricsCollector, get_metrics_registry

__all__ = [
    "configure_logging",
    "setup_structured_logging",
    "MetricsCollector",
    "get_metrics_registry",
]
