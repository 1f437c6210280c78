"""Shared logging utilities for webhook entry points.

Gives every transport bridge the same entry log so it is visible which
requests reached the webhook before any decoding happens.
"""

import logging
from typing import Any

from admission_webhook.constants import HANDLER_ENTRY_LOG_LEVEL

logger = logging.getLogger(__name__)


def log_handler_entry(
    operation: str,
    resource_kind: str,
    name: str,
    namespace: str,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log webhook invocation at configurable level.

    The log level is controlled by the HANDLER_ENTRY_LOG_LEVEL environment
    variable (default: DEBUG).

    Args:
        operation: Admission operation (CREATE, UPDATE, DELETE, CONNECT)
        resource_kind: Kind of the resource under review
        name: Resource name
        namespace: Resource namespace
        extra: Additional context to include in structured log
    """
    log_extra = {
        "operation": operation,
        "resource_kind": resource_kind,
        "resource_name": name,
        "namespace": namespace,
    }
    if extra:
        log_extra.update(extra)

    logger.log(
        HANDLER_ENTRY_LOG_LEVEL,
        f"Webhook invoked: {operation} {resource_kind}/{name} in {namespace}",
        extra=log_extra,
    )
