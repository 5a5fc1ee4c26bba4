"""In-memory implementation of DeployableStore.

Keeps resources as plain manifest dictionaries keyed by identity. Used for
tests and for dry runs against manifests loaded from YAML files.
"""

from __future__ import annotations

import random
import uuid
from pathlib import Path
from typing import Any, override

import yaml
from loguru import logger

from src.app.core.errors import StoreError
from src.app.core.models import Channel, Deployable, namespaced_key
from src.infra.constants import DEFAULT_CONSTANTS

from .store import DeployableStore

# Alphabet the API server uses for generate-name suffixes
_SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"


class InMemoryDeployableStore(DeployableStore):
    """In-memory deployable and channel store."""

    def __init__(self) -> None:
        self._deployables: dict[str, dict[str, Any]] = {}
        self._channels: dict[str, dict[str, Any]] = {}

    # =========================================================================
    # Seeding
    # =========================================================================

    def put_deployable(self, deployable: Deployable) -> None:
        """Store a deployable as-is, replacing any existing one."""
        self._deployables[deployable.key] = deployable.to_manifest()

    def put_channel(self, channel: Channel) -> None:
        """Store a channel as-is, replacing any existing one."""
        self._channels[channel.key] = channel.to_manifest()

    def load_manifests(self, manifests: list[dict[str, Any]]) -> int:
        """Seed the store from raw manifests, dispatching on ``kind``.

        Returns:
            Number of resources loaded
        """
        loaded = 0
        for manifest in manifests:
            kind = manifest.get("kind")
            if kind == DEFAULT_CONSTANTS.DEPLOYABLE_KIND:
                self.put_deployable(Deployable.from_manifest(manifest))
            elif kind == DEFAULT_CONSTANTS.CHANNEL_KIND:
                self.put_channel(Channel.from_manifest(manifest))
            else:
                logger.warning(f"Skipping manifest of unsupported kind '{kind}'")
                continue
            loaded += 1
        return loaded

    @classmethod
    def from_file(cls, path: Path) -> InMemoryDeployableStore:
        """Create a store seeded from a (multi-document) YAML file.

        Raises:
            ValueError: If a document is not a mapping
        """
        with open(path) as f:
            documents = [doc for doc in yaml.safe_load_all(f) if doc]

        manifests: list[dict[str, Any]] = []
        for doc in documents:
            if not isinstance(doc, dict):
                raise ValueError(
                    f"Invalid manifest in {path}: expected a mapping, got {type(doc).__name__}"
                )
            # Accept "kind: List" wrappers as written by kubectl get -o yaml
            if doc.get("kind") == "List":
                manifests.extend(doc.get("items") or [])
            else:
                manifests.append(doc)

        if not all(isinstance(manifest, dict) for manifest in manifests):
            raise ValueError(f"Invalid manifest in {path}: list items must be mappings")

        store = cls()
        loaded = store.load_manifests(manifests)
        logger.info(f"Loaded {loaded} resource(s) from {path}")
        return store

    # =========================================================================
    # Deployable Operations
    # =========================================================================

    @override
    async def list_deployables(self, namespace: str | None = None) -> list[Deployable]:
        return [
            Deployable.from_manifest(manifest)
            for manifest in self._deployables.values()
            if namespace is None
            or manifest.get("metadata", {}).get("namespace") == namespace
        ]

    @override
    async def get_deployable(self, name: str, namespace: str) -> Deployable | None:
        manifest = self._deployables.get(namespaced_key(namespace, name))
        return Deployable.from_manifest(manifest) if manifest else None

    @override
    async def create_deployable(self, deployable: Deployable) -> Deployable:
        created = deployable.deep_copy()
        metadata = created.metadata

        if not metadata.name:
            if not metadata.generate_name:
                raise StoreError("Deployable has neither name nor generateName")
            metadata.name = self._generate_name(metadata.generate_name)

        if created.key in self._deployables:
            raise StoreError(f'deployable "{created.key}" already exists')

        metadata.uid = str(uuid.uuid4())
        self._deployables[created.key] = created.to_manifest()
        return created

    @override
    async def delete_deployable(self, deployable: Deployable) -> None:
        if self._deployables.pop(deployable.key, None) is None:
            raise StoreError(f'deployable "{deployable.key}" not found')

    # =========================================================================
    # Channel Operations
    # =========================================================================

    @override
    async def list_channels(self, namespace: str | None = None) -> list[Channel]:
        return [
            Channel.from_manifest(manifest)
            for manifest in self._channels.values()
            if namespace is None
            or manifest.get("metadata", {}).get("namespace") == namespace
        ]

    @override
    async def get_channel(self, name: str, namespace: str) -> Channel | None:
        manifest = self._channels.get(namespaced_key(namespace, name))
        return Channel.from_manifest(manifest) if manifest else None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _generate_name(self, prefix: str) -> str:
        """Append a random suffix to a generate-name, avoiding collisions."""
        while True:
            suffix = "".join(
                random.choices(
                    _SUFFIX_ALPHABET, k=DEFAULT_CONSTANTS.GENERATED_NAME_SUFFIX_LENGTH
                )
            )
            name = f"{prefix}{suffix}"
            if not any(
                m.get("metadata", {}).get("name") == name
                for m in self._deployables.values()
            ):
                return name
