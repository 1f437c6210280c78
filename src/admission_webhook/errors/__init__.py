"""
Error handling module for the admission webhook.

This module provides the error hierarchy used to tell decode failures,
structured rejections and plain rejections apart.
"""

from .admission_errors import (
    AdmissionWebhookError,
    DecodeError,
    StatusError,
    ValidationFailure,
)

__all__ = [
    "AdmissionWebhookError",
    "DecodeError",
    "ValidationFailure",
    "StatusError",
]
