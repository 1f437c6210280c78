"""
Test fixtures for admission handling.

This module provides sample resources, a typed resource model and a
recording fake validator.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

from admission_webhook.models.admission import AdmissionRequest, Operation
from admission_webhook.models.resource import GroupVersionKind, Resource

WIDGET_GVK = GroupVersionKind(group="example.test.org", version="v1", kind="Widget")

MINIMAL_WIDGET: dict[str, Any] = {
    "apiVersion": "example.test.org/v1",
    "kind": "Widget",
    "metadata": {"name": "test-widget", "namespace": "default"},
    "spec": {},
}

SCALED_WIDGET: dict[str, Any] = {
    "apiVersion": "example.test.org/v1",
    "kind": "Widget",
    "metadata": {
        "name": "test-widget",
        "namespace": "default",
        "labels": {"app": "widget"},
        "resourceVersion": "42",
    },
    "spec": {"replicas": 3, "image": "registry.example/widget:1.0"},
}


class WidgetSpec(BaseModel):
    model_config = {"populate_by_name": True}

    replicas: int = Field(1, ge=0)
    image: str = ""


class Widget(Resource):
    """Typed resource used to exercise kind checks and field validation."""

    resource_kind = "Widget"

    spec: WidgetSpec = Field(default_factory=WidgetSpec)


def encode(obj: dict[str, Any]) -> bytes:
    return json.dumps(obj).encode("utf-8")


def make_request(
    operation: Operation,
    obj: bytes | None = b"{}",
    old_obj: bytes | None = b"{}",
    uid: str = "req-1",
) -> AdmissionRequest:
    """Build a request carrying only the payloads ``operation`` requires."""
    return AdmissionRequest(
        uid=uid,
        kind=WIDGET_GVK,
        name="test-widget",
        namespace="default",
        operation=operation,
        object=obj if operation in (Operation.CREATE, Operation.UPDATE) else None,
        old_object=(
            old_obj if operation in (Operation.UPDATE, Operation.DELETE) else None
        ),
    )


class FakeValidator:
    """Validator returning canned warnings or raising a canned error."""

    def __init__(
        self,
        error: Exception | None = None,
        warnings: list[str] | None = None,
    ):
        self.error = error
        self.warnings = warnings
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _result(self, hook: str, *objects: Any) -> list[str] | None:
        self.calls.append((hook, objects))
        if self.error is not None:
            raise self.error
        return self.warnings

    def validate_create(self, obj: Any) -> list[str] | None:
        return self._result("create", obj)

    def validate_update(self, obj: Any, old_obj: Any) -> list[str] | None:
        return self._result("update", obj, old_obj)

    def validate_delete(self, obj: Any) -> list[str] | None:
        return self._result("delete", obj)
