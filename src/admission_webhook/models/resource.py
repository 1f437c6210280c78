"""
Typed resource models.

Admission payloads are decoded into subclasses of Resource. Every field has a
default so that an empty JSON object decodes into a valid, empty resource;
concrete resource kinds add their own spec models on top.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class GroupVersionKind(BaseModel):
    """Identifies a resource kind within an API group and version."""

    model_config = ConfigDict(frozen=True)

    group: str = Field("", description="API group, empty for the core group")
    version: str = Field("", description="API version within the group")
    kind: str = Field("", description="Resource kind")

    @property
    def api_version(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


class ObjectMeta(BaseModel):
    """Subset of Kubernetes object metadata relevant to admission."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    namespace: str = ""
    uid: str = ""
    generation: int | None = None
    resource_version: str = Field("", alias="resourceVersion")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Resource(BaseModel):
    """
    Base class for typed objects decoded from admission payloads.

    Unknown top-level fields (spec, status, data, ...) are kept so that
    subclasses only need to declare the parts their validators inspect.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Kind this model accepts; None accepts any kind
    resource_kind: ClassVar[str | None] = None

    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def group_version_kind(self) -> GroupVersionKind:
        group, _, version = self.api_version.rpartition("/")
        return GroupVersionKind(group=group, version=version, kind=self.kind)

    def extra_field(self, name: str, default: Any = None) -> Any:
        """Return an undeclared top-level field, e.g. ``spec`` on a bare Resource."""
        return (self.model_extra or {}).get(name, default)
