"""
AdmissionReview request and response models.

These mirror the admission.k8s.io/v1 wire types closely enough for the
handler: the request carries raw object payloads, the response carries the
decision, a status block and warnings.
"""

import json
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from admission_webhook.constants import ADMISSION_API_VERSION, ADMISSION_REVIEW_KIND
from admission_webhook.models.resource import GroupVersionKind


class Operation(StrEnum):
    """Admission operation tag."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"


class Status(BaseModel):
    """Status block of an admission response (metav1.Status subset)."""

    model_config = ConfigDict(frozen=True)

    code: int = Field(..., description="HTTP status code")
    reason: str = Field("", description="Machine-readable reason token")
    message: str = Field("", description="Human-readable description")


def _encode_raw(obj: Any) -> bytes | None:
    if obj is None:
        return None
    if isinstance(obj, bytes):
        return obj
    if isinstance(obj, str):
        return obj.encode("utf-8")
    return json.dumps(obj).encode("utf-8")


class AdmissionRequest(BaseModel):
    """
    A proposed mutation submitted for validation.

    ``object`` holds the raw new object (CREATE, UPDATE) and ``old_object``
    the raw existing object (UPDATE, DELETE).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uid: str = ""
    kind: GroupVersionKind | None = None
    name: str = ""
    namespace: str = ""
    operation: Operation
    object: bytes | None = None
    old_object: bytes | None = Field(None, alias="oldObject")
    dry_run: bool = Field(False, alias="dryRun")

    @classmethod
    def from_review(cls, review: dict[str, Any]) -> "AdmissionRequest":
        """
        Build a request from an AdmissionReview envelope.

        Args:
            review: Parsed AdmissionReview body as received by the webhook

        Returns:
            AdmissionRequest with the embedded objects re-encoded to raw JSON

        Raises:
            pydantic.ValidationError: If the envelope has no usable request
        """
        request = dict(review.get("request") or {})
        return cls.model_validate(
            {
                "uid": request.get("uid", ""),
                "kind": request.get("kind"),
                "name": request.get("name", ""),
                "namespace": request.get("namespace", ""),
                "operation": request.get("operation"),
                "object": _encode_raw(request.get("object")),
                "oldObject": _encode_raw(request.get("oldObject")),
                "dryRun": bool(request.get("dryRun", False)),
            }
        )

    @property
    def kind_name(self) -> str:
        return self.kind.kind if self.kind else ""


class AdmissionResponse(BaseModel):
    """The admission decision returned for one request."""

    model_config = ConfigDict(frozen=True)

    uid: str = ""
    allowed: bool
    result: Status
    warnings: list[str] = Field(default_factory=list)

    def complete(self, request: AdmissionRequest) -> "AdmissionResponse":
        """Return a copy that echoes the request's uid."""
        return self.model_copy(update={"uid": request.uid})

    def to_review(self) -> dict[str, Any]:
        """Render the admission.k8s.io/v1 AdmissionReview response body."""
        status: dict[str, Any] = {"code": self.result.code}
        if self.result.reason:
            status["reason"] = self.result.reason
        if self.result.message:
            status["message"] = self.result.message

        response: dict[str, Any] = {
            "uid": self.uid,
            "allowed": self.allowed,
            "status": status,
        }
        if self.warnings:
            response["warnings"] = list(self.warnings)

        return {
            "apiVersion": ADMISSION_API_VERSION,
            "kind": ADMISSION_REVIEW_KIND,
            "response": response,
        }
