"""
Prometheus metrics for the admission webhook.

Tracks admission decisions, decode failures and handling latency. Metrics are
created unregistered and attached to a dedicated registry on first use of
get_metrics_registry(), so importing this module has no global side effects.
"""

import logging

from prometheus_client import CollectorRegistry, Counter, Histogram

logger = logging.getLogger(__name__)

# Global metrics registry
_metrics_registry: CollectorRegistry | None = None

ADMISSION_REQUESTS_TOTAL = Counter(
    "admission_webhook_requests_total",
    "Total number of admission requests handled",
    ["kind", "operation", "result"],
    registry=None,
)

ADMISSION_DECODE_ERRORS_TOTAL = Counter(
    "admission_webhook_decode_errors_total",
    "Total number of admission requests rejected because an object failed to decode",
    ["kind", "operation"],
    registry=None,
)

ADMISSION_DURATION = Histogram(
    "admission_webhook_duration_seconds",
    "Time spent handling admission requests",
    ["kind", "operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=None,
)


def get_metrics_registry() -> CollectorRegistry:
    """Get or create the global metrics registry."""
    global _metrics_registry

    if _metrics_registry is None:
        _metrics_registry = CollectorRegistry()
        for metric in [
            ADMISSION_REQUESTS_TOTAL,
            ADMISSION_DECODE_ERRORS_TOTAL,
            ADMISSION_DURATION,
        ]:
            _metrics_registry.register(metric)

    return _metrics_registry


class MetricsCollector:
    """Records admission metrics. Recording failures never fail a request."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def record_admission(
        self, kind: str, operation: str, result: str, duration: float
    ) -> None:
        """
        Record one admission decision.

        Args:
            kind: Resource kind of the request (may be empty)
            operation: Admission operation
            result: allowed, denied or errored
            duration: Handling time in seconds
        """
        if not self.enabled:
            return
        try:
            ADMISSION_REQUESTS_TOTAL.labels(
                kind=kind, operation=operation, result=result
            ).inc()
            ADMISSION_DURATION.labels(kind=kind, operation=operation).observe(
                duration
            )
        except Exception as e:
            logger.debug(f"Failed to record admission metrics: {e}")

    def record_decode_error(self, kind: str, operation: str) -> None:
        """Record a request rejected because an object could not be decoded."""
        if not self.enabled:
            return
        try:
            ADMISSION_DECODE_ERRORS_TOTAL.labels(kind=kind, operation=operation).inc()
        except Exception as e:
            logger.debug(f"Failed to record decode error metric: {e}")
