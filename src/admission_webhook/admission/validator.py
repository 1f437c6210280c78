"""
Validator capability consumed by the validating handler.

A validator implements one hook per operation. Each hook returns the
warnings to attach to the response (or None) and rejects the object by
raising:

- StatusError to reject with an explicit status (code, reason, message)
- ValidationFailure to reject with a message and optional warnings
- any other exception to reject with the exception's text
"""

from typing import Protocol, TypeAlias, TypeVar, runtime_checkable

from admission_webhook.models.resource import Resource

ObjT = TypeVar("ObjT", contravariant=True)

Warnings: TypeAlias = list[str] | None


@runtime_checkable
class Validator(Protocol[ObjT]):
    """Validation hooks for one resource kind."""

    def validate_create(self, obj: ObjT) -> Warnings: ...

    def validate_update(self, obj: ObjT, old_obj: ObjT) -> Warnings: ...

    def validate_delete(self, obj: ObjT) -> Warnings: ...


class CustomValidator:
    """
    Convenience base class that admits every operation.

    Subclasses override only the hooks they care about.
    """

    def validate_create(self, obj: Resource) -> Warnings:
        return None

    def validate_update(self, obj: Resource, old_obj: Resource) -> Warnings:
        return None

    def validate_delete(self, obj: Resource) -> Warnings:
        return None
