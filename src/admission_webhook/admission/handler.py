"""
Validating admission handler.

Decodes the object(s) carried by an admission request, calls the validator
hook that matches the operation and translates the outcome into an
admission response:

- no error: allowed with 200, validator warnings passed through in order
- StatusError: denied with the error's status verbatim, warnings dropped
- any other exception: denied with 403 Forbidden and the error text,
  warnings attached to a ValidationFailure are kept
- undecodable object: denied with 400 BadRequest, validator not called

The handler keeps no per-request state and can be shared across threads.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, assert_never

from pydantic import ValidationError as PydanticValidationError

from admission_webhook.admission import response as responses
from admission_webhook.admission.decoder import Decoder
from admission_webhook.admission.validator import Validator, Warnings
from admission_webhook.constants import (
    HTTP_BAD_REQUEST,
    RESULT_ALLOWED,
    RESULT_DENIED,
    RESULT_ERRORED,
)
from admission_webhook.errors import DecodeError
from admission_webhook.models.admission import (
    AdmissionRequest,
    AdmissionResponse,
    Operation,
)
from admission_webhook.models.outcome import (
    Admitted,
    PlainFailure,
    StructuredFailure,
    ValidationOutcome,
    classify_outcome,
)
from admission_webhook.models.resource import Resource
from admission_webhook.observability.logging import correlation_scope
from admission_webhook.observability.metrics import MetricsCollector
from admission_webhook.settings import settings

logger = logging.getLogger(__name__)


class UnknownOperationError(ValueError):
    """Request carries an operation tag the handler does not know."""


class ValidatingHandler:
    """Runs a Validator against admission requests for one object type."""

    def __init__(
        self,
        validator: Validator[Any],
        object_type: type = Resource,
        decoder: Decoder | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the handler.

        Args:
            validator: Validation hooks to invoke
            object_type: Type the raw objects are decoded into
            decoder: Decoder to use (a default Decoder if omitted)
            metrics: Metrics collector (built from settings if omitted)

        Raises:
            TypeError: If validator lacks one of the validation hooks
        """
        if not isinstance(validator, Validator):
            raise TypeError(
                f"{type(validator).__name__} does not implement "
                "validate_create, validate_update and validate_delete"
            )
        self.validator = validator
        self.object_type = object_type
        self.decoder = decoder or Decoder()
        self.metrics = metrics or MetricsCollector(enabled=settings.metrics_enabled)

    def handle(self, request: AdmissionRequest) -> AdmissionResponse:
        """
        Handle one admission request.

        Never raises: every failure is mapped to a denying response.

        Args:
            request: The admission request to validate

        Returns:
            Admission response echoing the request uid
        """
        start_time = time.perf_counter()

        with correlation_scope(request.uid or None):
            response, result = self._dispatch(request)
            response = response.complete(request)
            self._log_decision(request, response)

        self.metrics.record_admission(
            kind=request.kind_name,
            operation=str(request.operation),
            result=result,
            duration=time.perf_counter() - start_time,
        )
        return response

    def _dispatch(self, request: AdmissionRequest) -> tuple[AdmissionResponse, str]:
        hook: Callable[..., Warnings]
        objects: tuple[Any, ...]

        try:
            operation = request.operation
            if operation == Operation.CONNECT:
                # CONNECT carries no object and is not validated
                return responses.allowed(), RESULT_ALLOWED
            elif operation == Operation.CREATE:
                obj = self._decode(request.object)
                hook, objects = self.validator.validate_create, (obj,)
            elif operation == Operation.UPDATE:
                obj = self._decode(request.object)
                old_obj = self._decode(request.old_object)
                hook, objects = self.validator.validate_update, (obj, old_obj)
            elif operation == Operation.DELETE:
                # The object being deleted is carried in old_object
                old_obj = self._decode(request.old_object)
                hook, objects = self.validator.validate_delete, (old_obj,)
            else:
                error = UnknownOperationError(f"unknown operation {operation!r}")
                return responses.errored(HTTP_BAD_REQUEST, error), RESULT_ERRORED
        except DecodeError as e:
            logger.warning(
                f"Rejecting {request.operation} request: {e}",
                extra={
                    "operation": str(request.operation),
                    "resource_kind": request.kind_name,
                    "request_uid": request.uid,
                    "error_type": type(e).__name__,
                    "error_category": e.category,
                },
            )
            self.metrics.record_decode_error(
                kind=request.kind_name, operation=str(request.operation)
            )
            return responses.errored(HTTP_BAD_REQUEST, e), RESULT_ERRORED

        response = self._translate(self._invoke(hook, *objects))
        return response, RESULT_ALLOWED if response.allowed else RESULT_DENIED

    def _decode(self, raw: bytes | None) -> Any:
        return self.decoder.decode_raw(raw, self.object_type)

    def _invoke(
        self, hook: Callable[..., Warnings], *objects: Any
    ) -> ValidationOutcome:
        hook_name = getattr(hook, "__name__", repr(hook))
        try:
            warnings = hook(*objects)
        except Exception as e:
            logger.debug(f"Validator {hook_name} rejected object: {e}")
            return self._classify(hook_name, None, e)
        return self._classify(hook_name, warnings, None)

    @staticmethod
    def _classify(
        hook_name: str, warnings: Any, error: Exception | None
    ) -> ValidationOutcome:
        try:
            return classify_outcome(warnings, error)
        except (PydanticValidationError, TypeError) as e:
            logger.warning(f"Validator {hook_name} returned malformed warnings: {e}")
            return PlainFailure(
                message=f"validator {hook_name} returned malformed warnings: {e}"
            )

    @staticmethod
    def _translate(outcome: ValidationOutcome) -> AdmissionResponse:
        if isinstance(outcome, Admitted):
            return responses.allowed(warnings=outcome.warnings)
        if isinstance(outcome, StructuredFailure):
            return responses.validation_response_from_status(False, outcome.status)
        if isinstance(outcome, PlainFailure):
            return responses.denied(outcome.message, warnings=outcome.warnings)
        assert_never(outcome)

    def _log_decision(
        self, request: AdmissionRequest, response: AdmissionResponse
    ) -> None:
        if response.allowed:
            level = getattr(logging, settings.decision_log_level.upper(), logging.DEBUG)
            verdict = "admitted"
        else:
            level = logging.INFO
            verdict = "denied"

        logger.log(
            level,
            f"{request.operation} {request.kind_name or 'object'} "
            f"{request.namespace}/{request.name} {verdict} "
            f"({response.result.code}): {response.result.message}",
            extra={
                "operation": str(request.operation),
                "resource_kind": request.kind_name,
                "resource_name": request.name,
                "namespace": request.namespace,
                "request_uid": request.uid,
                "allowed": response.allowed,
                "http_status": response.result.code,
                "reason": response.result.reason,
                "warning_count": len(response.warnings),
                "dry_run": request.dry_run,
            },
        )
