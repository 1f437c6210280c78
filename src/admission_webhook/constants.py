"""
Constants used throughout the admission webhook.

This module defines all constant values used by the webhook including:
- HTTP status codes used in admission results
- Kubernetes status reasons
- AdmissionReview API identifiers
- Default logging levels
"""

import logging
import os

# HTTP status codes carried in admission results
HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_FORBIDDEN = 403
HTTP_CONFLICT = 409
HTTP_UNPROCESSABLE_ENTITY = 422

# Status reasons (metav1.StatusReason values)
REASON_BAD_REQUEST = "BadRequest"
REASON_FORBIDDEN = "Forbidden"
REASON_CONFLICT = "AlreadyExists"
REASON_INVALID = "Invalid"

# AdmissionReview envelope identifiers
ADMISSION_API_VERSION = "admission.k8s.io/v1"
ADMISSION_REVIEW_KIND = "AdmissionReview"

# Metric result labels
RESULT_ALLOWED = "allowed"
RESULT_DENIED = "denied"
RESULT_ERRORED = "errored"

# Log level for per-request entry logs in the kopf bridge
HANDLER_ENTRY_LOG_LEVEL = getattr(
    logging,
    os.environ.get("HANDLER_ENTRY_LOG_LEVEL", "DEBUG").upper(),
    logging.DEBUG,
)
