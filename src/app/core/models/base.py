"""Shared Kubernetes object metadata models.

Resources are parsed from the raw dictionaries returned by the API server
(or written by hand in tests) and dumped back with their camelCase keys.
Unknown fields are preserved so a round trip never drops server-side data.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from src.infra.constants import DEFAULT_CONSTANTS


def namespaced_key(namespace: str, name: str) -> str:
    """Build the ``namespace/name`` identity string of a resource."""
    return f"{namespace}{DEFAULT_CONSTANTS.IDENTITY_SEPARATOR}{name}"


class OwnerReference(BaseModel):
    """Back-reference from a projection to its immediate source."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    name: str = ""
    uid: str = ""


class ObjectMeta(BaseModel):
    """The subset of ``metadata`` this package reads and writes."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    namespace: str | None = None
    generate_name: str | None = Field(default=None, alias="generateName")
    uid: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    owner_references: list[OwnerReference] | None = Field(
        default=None, alias="ownerReferences"
    )


class KubernetesResource(BaseModel):
    """Base model for namespaced custom resources."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    api_version: str = Field(
        default=DEFAULT_CONSTANTS.API_VERSION, alias="apiVersion"
    )
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name or ""

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""

    @property
    def key(self) -> str:
        """Identity string (``namespace/name``)."""
        return namespaced_key(self.namespace, self.name)

    @property
    def annotations(self) -> dict[str, str] | None:
        return self.metadata.annotations

    @property
    def labels(self) -> dict[str, str] | None:
        return self.metadata.labels

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any]) -> Self:
        """Parse a raw Kubernetes object dictionary."""
        return cls.model_validate(manifest)

    def to_manifest(self) -> dict[str, Any]:
        """Dump to a Kubernetes object dictionary with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def deep_copy(self) -> Self:
        """Return an independent copy that shares no nested state."""
        return self.model_copy(deep=True)
