"""
Admission error hierarchy with categorization.

This module defines the error types raised by decoders and validators and
their conversion into kopf admission errors.
"""

from collections.abc import Iterable

import kopf

from admission_webhook.constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_FORBIDDEN,
    HTTP_UNPROCESSABLE_ENTITY,
    REASON_BAD_REQUEST,
    REASON_CONFLICT,
    REASON_FORBIDDEN,
    REASON_INVALID,
)
from admission_webhook.models.admission import Status


class AdmissionWebhookError(Exception):
    """
    Base error class for all admission-related exceptions.

    Provides categorization so logs and metrics can tell failure kinds apart.
    """

    def __init__(self, message: str, category: str):
        """
        Initialize admission error.

        Args:
            message: Human-readable error description
            category: Error category (decode, validation, status)
        """
        super().__init__(message)
        self.message = message
        self.category = category

    def as_kopf_error(self) -> kopf.AdmissionError:
        """Convert to a kopf admission error (HTTP 403)."""
        return kopf.AdmissionError(str(self), code=HTTP_FORBIDDEN)


class DecodeError(AdmissionWebhookError):
    """Raw payload could not be turned into a typed object."""

    def __init__(self, message: str, kind: str | None = None):
        if kind:
            message = f"cannot decode {kind}: {message}"
        super().__init__(message=message, category="decode")
        self.kind = kind

    def as_kopf_error(self) -> kopf.AdmissionError:
        return kopf.AdmissionError(str(self), code=HTTP_BAD_REQUEST)


class ValidationFailure(AdmissionWebhookError):
    """Plain rejection raised by a validator, optionally carrying warnings."""

    def __init__(self, message: str, warnings: Iterable[str] | None = None):
        super().__init__(message=message, category="validation")
        self.warnings = list(warnings or [])


class StatusError(ValidationFailure):
    """
    Structured rejection carrying an explicit status.

    The status is copied verbatim into the admission response. Warnings passed
    alongside a StatusError never reach the response.
    """

    def __init__(
        self,
        status: Status,
        warnings: Iterable[str] | None = None,
    ):
        super().__init__(message=status.message, warnings=warnings)
        self.category = "status"
        self.status = status

    def as_kopf_error(self) -> kopf.AdmissionError:
        """Convert to a kopf admission error carrying the status code."""
        return kopf.AdmissionError(self.status.message, code=self.status.code)

    @classmethod
    def invalid(cls, message: str) -> "StatusError":
        """422 Invalid: the object failed semantic validation."""
        return cls(
            Status(
                code=HTTP_UNPROCESSABLE_ENTITY, reason=REASON_INVALID, message=message
            )
        )

    @classmethod
    def forbidden(cls, message: str) -> "StatusError":
        """403 Forbidden: the mutation is not permitted."""
        return cls(
            Status(code=HTTP_FORBIDDEN, reason=REASON_FORBIDDEN, message=message)
        )

    @classmethod
    def bad_request(cls, message: str) -> "StatusError":
        """400 BadRequest: the request itself is malformed."""
        return cls(
            Status(code=HTTP_BAD_REQUEST, reason=REASON_BAD_REQUEST, message=message)
        )

    @classmethod
    def conflict(cls, message: str) -> "StatusError":
        """409 AlreadyExists: the object clashes with existing state."""
        return cls(Status(code=HTTP_CONFLICT, reason=REASON_CONFLICT, message=message))
