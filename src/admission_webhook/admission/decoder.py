"""
Decoder for raw admission payloads.

Turns the raw JSON bytes embedded in an admission request into a typed
object. The decoder holds no state; pydantic adapters are cached per target
type at module level and are read-only once built.
"""

import functools
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from admission_webhook.errors import DecodeError
from admission_webhook.models.admission import AdmissionRequest
from admission_webhook.models.resource import Resource

logger = logging.getLogger(__name__)

T = TypeVar("T")


@functools.cache
def _adapter_for(into: Any) -> TypeAdapter:
    return TypeAdapter(into)


def _type_name(into: Any) -> str:
    return getattr(into, "__name__", repr(into))


class Decoder:
    """Decodes raw object payloads into typed objects."""

    def decode(self, request: AdmissionRequest, into: type[T]) -> T:
        """
        Decode the new object carried by an admission request.

        Args:
            request: Admission request whose ``object`` payload is decoded
            into: Target type (a Resource subclass, or ``dict`` for unstructured)

        Returns:
            The decoded object

        Raises:
            DecodeError: If the payload is missing or cannot be decoded
        """
        return self.decode_raw(request.object, into)

    def decode_raw(self, raw: bytes | None, into: type[T]) -> T:
        """
        Decode a raw JSON payload into ``into``.

        Args:
            raw: Raw JSON bytes of a single object
            into: Target type (a Resource subclass, or ``dict`` for unstructured)

        Returns:
            The decoded object

        Raises:
            DecodeError: If the payload is empty, is not a JSON object, or does
                not match the target type
        """
        if not raw or not raw.strip():
            raise DecodeError("there is no content to decode")

        try:
            obj = _adapter_for(into).validate_json(raw)
        except PydanticValidationError as e:
            logger.debug(f"Payload rejected by {_type_name(into)}: {e}")
            raise DecodeError(str(e), kind=_type_name(into)) from e

        # Unstructured targets still have to be a single JSON object
        if not isinstance(obj, dict | BaseModel):
            raise DecodeError(
                f"expected a JSON object, got {type(obj).__name__}",
                kind=_type_name(into),
            )

        if isinstance(obj, Resource):
            expected = type(obj).resource_kind
            if expected and obj.kind and obj.kind != expected:
                raise DecodeError(
                    f"payload kind {obj.kind!r} does not match {expected!r}",
                    kind=_type_name(into),
                )

        return obj
