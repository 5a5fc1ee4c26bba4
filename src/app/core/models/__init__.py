"""Deployable and Channel resource models."""

from .base import KubernetesResource, ObjectMeta, OwnerReference, namespaced_key
from .channel import Channel, ChannelGate, ChannelRef, ChannelSpec
from .deployable import Deployable, DeployableSpec

__all__ = [
    "Channel",
    "ChannelGate",
    "ChannelRef",
    "ChannelSpec",
    "Deployable",
    "DeployableSpec",
    "KubernetesResource",
    "ObjectMeta",
    "OwnerReference",
    "namespaced_key",
]
