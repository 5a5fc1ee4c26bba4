"""Promotion of deployables into channels.

Composes the gate policy, relationship resolution and projection steps into
one reconciliation pass: authorize each candidate channel, look up the
projections that already exist and create the missing ones. Re-running a
pass over an unchanged store creates nothing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from src.app.core.errors import PropagationError
from src.app.core.models import Channel, Deployable
from src.app.core.services.gate_policy import validate_in_channel, validate_to_channel
from src.app.core.services.projector import generate_deployable_for_channel
from src.app.core.services.relationships import (
    DeployableFamily,
    FamilyIndex,
    resolve_family,
)

if TYPE_CHECKING:
    from src.infra.k8s.store import DeployableStore


@dataclass
class PropagationResult:
    """Outcome of propagating one deployable, keyed by channel identity.

    Attributes:
        deployable: Identity of the propagated deployable
        created: Projections created in this pass
        planned: Projections that would be created (dry run only)
        existing: Projections found already in place
        resident: Channels the deployable already sits in
        denied: Channels the deployable may not be promoted into
    """

    deployable: str
    created: dict[str, Deployable] = field(default_factory=dict)
    planned: dict[str, Deployable] = field(default_factory=dict)
    existing: dict[str, Deployable] = field(default_factory=dict)
    resident: list[str] = field(default_factory=list)
    denied: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.created)


class ChannelPropagator:
    """Creates missing channel projections of deployables.

    Store failures propagate as StoreError; nothing is retried here.
    """

    def __init__(self, store: DeployableStore) -> None:
        self.store = store

    async def propagate(
        self,
        deployable: Deployable,
        channels: Iterable[Channel],
        *,
        dry_run: bool = False,
    ) -> PropagationResult:
        """Promote a deployable into every permitted channel.

        Args:
            deployable: Deployable to promote
            channels: Candidate channels
            dry_run: Build projections without creating them

        Returns:
            PropagationResult describing each channel

        Raises:
            PropagationError: If the deployable is itself a channel projection;
                              only roots are promoted
        """
        if deployable.channel_source:
            raise PropagationError(
                f"Deployable {deployable.key} is a projection of "
                f"{deployable.channel_source}; promote the root instead"
            )

        result, permitted = self._authorize(deployable, channels)
        if not permitted:
            return result

        family = await resolve_family(
            self.store, deployable, {channel.namespace for channel in permitted}
        )
        await self._materialize(deployable, permitted, family, result, dry_run)
        return result

    async def propagate_all(
        self,
        channels: Iterable[Channel] | None = None,
        *,
        dry_run: bool = False,
    ) -> list[PropagationResult]:
        """Promote every root deployable into the channels it may enter.

        Projections are not promoted further; their roots are. One snapshot
        is listed and indexed for all deployables.

        Args:
            channels: Candidate channels (all channels in the store if None)
            dry_run: Build projections without creating them

        Returns:
            One PropagationResult per root deployable with a permitted channel
        """
        candidates = (
            list(channels) if channels is not None else await self.store.list_channels()
        )
        snapshot = await self.store.list_deployables()
        index = FamilyIndex(snapshot)
        logger.info(
            f"Propagating {len(index)} deployable(s) across {len(candidates)} channel(s)"
        )

        results: list[PropagationResult] = []
        for deployable in snapshot:
            if deployable.channel_source:
                continue

            result, permitted = self._authorize(deployable, candidates)
            if not permitted:
                continue

            family = index.family_of(
                deployable, {channel.namespace for channel in permitted}
            )
            await self._materialize(deployable, permitted, family, result, dry_run)
            results.append(result)

        return results

    def _authorize(
        self, deployable: Deployable, channels: Iterable[Channel]
    ) -> tuple[PropagationResult, list[Channel]]:
        result = PropagationResult(deployable=deployable.key)
        permitted: list[Channel] = []

        for channel in channels:
            if validate_in_channel(deployable, channel):
                result.resident.append(channel.key)
            elif validate_to_channel(deployable, channel):
                permitted.append(channel)
            else:
                logger.debug(f"Deployable {deployable.key} denied by channel {channel.key}")
                result.denied.append(channel.key)

        return result, permitted

    async def _materialize(
        self,
        deployable: Deployable,
        channels: list[Channel],
        family: DeployableFamily,
        result: PropagationResult,
        dry_run: bool,
    ) -> None:
        for channel in channels:
            existing = family.child_for(channel)
            if existing is not None:
                logger.info(
                    f"Deployable {deployable.key} already in channel {channel.key} as {existing.key}"
                )
                result.existing[channel.key] = existing
                continue

            projection = generate_deployable_for_channel(deployable, channel)
            if projection is None:
                continue

            if dry_run:
                result.planned[channel.key] = projection
                continue

            created = await self.store.create_deployable(projection)
            result.created[channel.key] = created
            logger.info(
                f"Promoted deployable {deployable.key} to channel {channel.key} as {created.key}"
            )
