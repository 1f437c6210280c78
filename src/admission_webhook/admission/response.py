"""
Constructors for admission responses.

Every response leaving the handler is built here so that the status code,
reason and warning rules live in one place.
"""

from collections.abc import Iterable

from admission_webhook.constants import (
    HTTP_BAD_REQUEST,
    HTTP_FORBIDDEN,
    HTTP_OK,
    REASON_BAD_REQUEST,
    REASON_FORBIDDEN,
)
from admission_webhook.models.admission import AdmissionResponse, Status


def validation_response(
    allowed: bool,
    code: int,
    reason: str = "",
    message: str = "",
    warnings: Iterable[str] = (),
) -> AdmissionResponse:
    return AdmissionResponse(
        allowed=allowed,
        result=Status(code=code, reason=reason, message=message),
        warnings=list(warnings),
    )


def allowed(message: str = "", warnings: Iterable[str] = ()) -> AdmissionResponse:
    """Admit the request with a 200 status."""
    return validation_response(True, HTTP_OK, message=message, warnings=warnings)


def denied(message: str, warnings: Iterable[str] = ()) -> AdmissionResponse:
    """Reject the request with 403 Forbidden."""
    return validation_response(
        False, HTTP_FORBIDDEN, REASON_FORBIDDEN, message, warnings
    )


def errored(code: int, error: Exception) -> AdmissionResponse:
    """
    Reject a request that could not be processed.

    Used for malformed requests such as undecodable objects or unknown
    operations. A 400 code is tagged with the BadRequest reason.
    """
    reason = REASON_BAD_REQUEST if code == HTTP_BAD_REQUEST else ""
    return validation_response(False, code, reason, str(error))


def validation_response_from_status(
    is_allowed: bool, status: Status
) -> AdmissionResponse:
    """Build a response carrying ``status`` verbatim and no warnings."""
    return AdmissionResponse(allowed=is_allowed, result=status, warnings=[])
