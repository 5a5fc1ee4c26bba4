"""Deployable resource model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.app.core.models.base import KubernetesResource
from src.app.core.models.channel import Channel, ChannelRef
from src.infra.constants import DEFAULT_CONSTANTS


class DeployableSpec(BaseModel):
    """Deployable spec.

    ``template`` and any unknown keys are opaque payload. ``placement``,
    ``overrides`` and ``dependencies`` are dropped from projections.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    template: dict[str, Any] | None = None
    channels: list[str] | None = None
    placement: dict[str, Any] | None = None
    overrides: list[dict[str, Any]] | None = None
    dependencies: list[dict[str, Any]] | None = None


class Deployable(KubernetesResource):
    """A template that can be instantiated and distributed through channels."""

    kind: str = DEFAULT_CONSTANTS.DEPLOYABLE_KIND
    spec: DeployableSpec = Field(default_factory=DeployableSpec)

    @property
    def generate_name(self) -> str:
        return self.metadata.generate_name or ""

    @property
    def uid(self) -> str:
        return self.metadata.uid or ""

    @property
    def channel_source(self) -> str:
        """Identity of the root this deployable was projected from, if any."""
        return (self.annotations or {}).get(
            DEFAULT_CONSTANTS.ANNOTATION_CHANNEL_SOURCE, ""
        )

    @property
    def channel(self) -> str:
        """Identity of the channel this deployable was projected into, if any."""
        return (self.annotations or {}).get(DEFAULT_CONSTANTS.ANNOTATION_CHANNEL, "")

    @property
    def channel_refs(self) -> list[ChannelRef]:
        return [ChannelRef.parse(entry) for entry in self.spec.channels or []]

    def references_channel(self, channel: Channel | ChannelRef) -> bool:
        """Check whether ``spec.channels`` lists the given channel."""
        return any(ref.matches(channel) for ref in self.channel_refs)
