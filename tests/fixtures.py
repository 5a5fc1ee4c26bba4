"""Shared factories and fixtures for Deployable and Channel tests."""

from __future__ import annotations

from typing import Any

import pytest

from src.app.core.models import Channel, Deployable
from src.infra.constants import DEFAULT_CONSTANTS
from src.infra.k8s import InMemoryDeployableStore

CHANNEL_SOURCE = DEFAULT_CONSTANTS.ANNOTATION_CHANNEL_SOURCE
CHANNEL = DEFAULT_CONSTANTS.ANNOTATION_CHANNEL


def make_deployable(
    name: str = "app",
    namespace: str = "ns1",
    *,
    generate_name: str | None = None,
    channels: list[str] | None = None,
    annotations: dict[str, str] | None = None,
    labels: dict[str, str] | None = None,
    uid: str | None = None,
    spec: dict[str, Any] | None = None,
) -> Deployable:
    """Build a Deployable from the same dictionary shape the API returns."""
    metadata: dict[str, Any] = {"name": name, "namespace": namespace}
    if generate_name is not None:
        metadata["generateName"] = generate_name
    if annotations is not None:
        metadata["annotations"] = annotations
    if labels is not None:
        metadata["labels"] = labels
    if uid is not None:
        metadata["uid"] = uid

    body = dict(spec or {"template": {"kind": "ConfigMap", "apiVersion": "v1"}})
    if channels is not None:
        body["channels"] = channels

    return Deployable.from_manifest(
        {
            "apiVersion": DEFAULT_CONSTANTS.API_VERSION,
            "kind": DEFAULT_CONSTANTS.DEPLOYABLE_KIND,
            "metadata": metadata,
            "spec": body,
        }
    )


def make_channel(
    name: str = "gold",
    namespace: str = "ns2",
    *,
    gate_annotations: dict[str, str] | None = None,
    gated: bool | None = None,
    source_namespaces: list[str] | None = None,
) -> Channel:
    """Build a Channel; ``gated`` defaults to True when gate annotations are given."""
    spec: dict[str, Any] = {"type": "Namespace", "pathname": namespace}
    if gated is None:
        gated = gate_annotations is not None
    if gated:
        spec["gates"] = (
            {"annotations": gate_annotations} if gate_annotations is not None else {}
        )
    if source_namespaces is not None:
        spec["sourceNamespaces"] = source_namespaces

    return Channel.from_manifest(
        {
            "apiVersion": DEFAULT_CONSTANTS.API_VERSION,
            "kind": DEFAULT_CONSTANTS.CHANNEL_KIND,
            "metadata": {"name": name, "namespace": namespace},
            "spec": spec,
        }
    )


def make_projection(
    root: Deployable,
    channel: Channel,
    name: str,
    *,
    generate_name: str | None = None,
) -> Deployable:
    """Build a deployable that looks like an existing projection of ``root``."""
    return make_deployable(
        name,
        channel.namespace,
        generate_name=generate_name or f"{root.generate_name or root.name}-",
        channels=root.spec.channels,
        annotations={CHANNEL_SOURCE: root.key, CHANNEL: channel.key},
    )


@pytest.fixture
def memory_store() -> InMemoryDeployableStore:
    """Create an empty in-memory store."""
    return InMemoryDeployableStore()
