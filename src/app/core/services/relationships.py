"""Relationship resolution between deployables and their channel projections.

Deployables carry no parent or child pointers. The family of a deployable is
reconstructed from a flat snapshot of all deployables using two conventions:

- A projection's ``channel-source`` annotation names its root deployable.
- A projection's generate-name equals the root's generated-name prefix.

Only one generation is resolved: the parent the deployable was projected
from (if it is itself a projection) and its direct channel projections.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from src.app.core.errors import StoreError
from src.app.core.models import Channel, ChannelRef, Deployable
from src.app.core.services.naming import generated_name_prefix

if TYPE_CHECKING:
    from src.infra.k8s.store import DeployableStore


@dataclass
class DeployableFamily:
    """The parent and direct channel projections of a deployable.

    Attributes:
        parent: Root the deployable was projected from, or None
        children: Existing projections keyed by channel identity
                  (``namespace/name``)
    """

    parent: Deployable | None = None
    children: dict[str, Deployable] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.parent is None and not self.children

    def child_for(self, channel: Channel | ChannelRef) -> Deployable | None:
        """Get the existing projection into a channel, if any."""
        return self.children.get(channel.key)

    def describe(self) -> str:
        parent = self.parent.key if self.parent else None
        children = " ".join(
            f"(ch: {ch} dpl: {dpl.key})" for ch, dpl in self.children.items()
        )
        return f"parent: {parent}, children: [{children}]"


def _is_projection_of(
    candidate: Deployable,
    source_key: str,
    prefix: str,
    channel_namespaces: Collection[str],
) -> bool:
    if candidate.generate_name != prefix:
        return False
    if candidate.namespace not in channel_namespaces:
        return False
    return candidate.channel_source == source_key


def find_family(
    snapshot: Iterable[Deployable],
    deployable: Deployable,
    channel_namespaces: Collection[str],
) -> DeployableFamily:
    """Find the parent and channel projections of a deployable in a snapshot.

    Args:
        snapshot: All deployables visible to the caller
        deployable: Deployable whose family is resolved
        channel_namespaces: Namespaces of the channels under consideration

    Returns:
        DeployableFamily holding deep copies taken from the snapshot
    """
    family = DeployableFamily()
    if not channel_namespaces:
        return family

    dpl_key = deployable.key
    parent_key = deployable.channel_source
    prefix = generated_name_prefix(deployable)

    logger.info(f"Resolving family of deployable {dpl_key}")

    for candidate in snapshot:
        if parent_key and candidate.key == parent_key:
            family.parent = candidate.deep_copy()

        logger.debug(
            f"Deployable {deployable.name}: checking {candidate.key} "
            f"(generateName: {candidate.generate_name})"
        )

        if _is_projection_of(candidate, dpl_key, prefix, channel_namespaces):
            logger.debug(f"Adding {candidate.key} to children of {dpl_key}")
            family.children[candidate.channel] = candidate.deep_copy()

    logger.info(f"Deployable {dpl_key}: {family.describe()}")
    return family


async def resolve_family(
    store: DeployableStore,
    deployable: Deployable,
    channel_namespaces: Collection[str],
) -> DeployableFamily:
    """List all deployables from the store and resolve a deployable's family.

    Args:
        store: Deployable store to list from
        deployable: Deployable whose family is resolved
        channel_namespaces: Namespaces of the channels under consideration

    Returns:
        DeployableFamily; empty without touching the store when
        ``channel_namespaces`` is empty

    Raises:
        StoreError: If listing deployables fails
    """
    if not channel_namespaces:
        return DeployableFamily()

    try:
        snapshot = await store.list_deployables()
    except StoreError as e:
        logger.error(f"Failed to list deployables for deployable {deployable.key}: {e}")
        raise

    return find_family(snapshot, deployable, channel_namespaces)


class FamilyIndex:
    """One-pass index over a snapshot for resolving many families.

    Builds a map from identity to deployable and a map from channel-source
    to projections, so each lookup avoids rescanning the snapshot.
    ``family_of`` returns the same family as ``find_family`` would.
    """

    def __init__(self, snapshot: Iterable[Deployable]) -> None:
        self._by_key: dict[str, Deployable] = {}
        self._by_source: dict[str, list[Deployable]] = defaultdict(list)

        for dpl in snapshot:
            self._by_key[dpl.key] = dpl
            if dpl.channel_source:
                self._by_source[dpl.channel_source].append(dpl)

    def __len__(self) -> int:
        return len(self._by_key)

    def get(self, key: str) -> Deployable | None:
        dpl = self._by_key.get(key)
        return dpl.deep_copy() if dpl else None

    def family_of(
        self,
        deployable: Deployable,
        channel_namespaces: Collection[str],
    ) -> DeployableFamily:
        family = DeployableFamily()
        if not channel_namespaces:
            return family

        if deployable.channel_source:
            family.parent = self.get(deployable.channel_source)

        dpl_key = deployable.key
        prefix = generated_name_prefix(deployable)
        for child in self._by_source.get(dpl_key, []):
            if _is_projection_of(child, dpl_key, prefix, channel_namespaces):
                family.children[child.channel] = child.deep_copy()

        return family
