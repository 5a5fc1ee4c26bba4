"""Channel resource model and channel references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.app.core.models.base import KubernetesResource, namespaced_key
from src.infra.constants import DEFAULT_CONSTANTS


class ChannelGate(BaseModel):
    """Access gate of a channel.

    Every entry of ``annotations`` must be present with an equal value on a
    deployable for it to pass the gate.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    annotations: dict[str, str] | None = None
    label_selector: dict[str, Any] | None = Field(default=None, alias="labelSelector")


class ChannelSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str | None = None
    pathname: str | None = None
    source_namespaces: list[str] | None = Field(default=None, alias="sourceNamespaces")
    gates: ChannelGate | None = None


class Channel(KubernetesResource):
    """A named distribution point with an optional gate policy."""

    kind: str = DEFAULT_CONSTANTS.CHANNEL_KIND
    spec: ChannelSpec = Field(default_factory=ChannelSpec)

    @property
    def gates(self) -> ChannelGate | None:
        return self.spec.gates

    @property
    def gate_annotations(self) -> dict[str, str] | None:
        return self.spec.gates.annotations if self.spec.gates else None

    @property
    def ref(self) -> ChannelRef:
        return ChannelRef(name=self.name, namespace=self.namespace)


@dataclass(frozen=True)
class ChannelRef:
    """Reference to a channel, as listed in a deployable's ``spec.channels``.

    A reference written as ``namespace/name`` is fully qualified and matches
    only that channel. A bare ``name`` carries no namespace and matches a
    channel of that name in any namespace.
    """

    name: str
    namespace: str = ""

    @classmethod
    def parse(cls, value: str, default_namespace: str = "") -> ChannelRef:
        namespace, sep, name = value.strip().rpartition(
            DEFAULT_CONSTANTS.IDENTITY_SEPARATOR
        )
        if not sep:
            return cls(name=name, namespace=default_namespace)
        return cls(name=name, namespace=namespace)

    @property
    def is_qualified(self) -> bool:
        return bool(self.namespace)

    @property
    def key(self) -> str:
        return namespaced_key(self.namespace, self.name)

    def matches(self, channel: Channel | ChannelRef) -> bool:
        if self.name != channel.name:
            return False
        return not self.is_qualified or self.namespace == channel.namespace

    def __str__(self) -> str:
        return self.key if self.is_qualified else self.name
