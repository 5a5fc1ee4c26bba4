"""Channel projection construction and cleanup.

A projection is a copy of a deployable placed in a channel's namespace. It
keeps the base template, drops scheduling, patch and dependency directives,
is owned by its immediate source and always records the true root in its
``channel-source`` annotation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from src.app.core.errors import CleanupError, StoreError
from src.app.core.models import (
    Channel,
    ChannelRef,
    Deployable,
    ObjectMeta,
    OwnerReference,
)
from src.app.core.services.naming import generated_name_prefix
from src.infra.constants import DEFAULT_CONSTANTS

if TYPE_CHECKING:
    from src.infra.k8s.store import DeployableStore


@dataclass
class CleanupReport:
    """Result of removing the deployables of a retired channel."""

    channel: str
    deleted: list[str] = field(default_factory=list)


def _owner_references(source: Deployable) -> list[OwnerReference]:
    return [
        OwnerReference(
            api_version=source.api_version,
            kind=source.kind,
            name=source.name,
            uid=source.uid,
        )
    ]


def _projection_annotations(
    source: Deployable, channel: Channel | ChannelRef
) -> dict[str, str]:
    annotations = dict(source.annotations or {})

    # A projection of a projection still points at the root
    channel_source = annotations.get(DEFAULT_CONSTANTS.ANNOTATION_CHANNEL_SOURCE) or source.key

    annotations[DEFAULT_CONSTANTS.ANNOTATION_IS_LOCAL] = "false"
    annotations[DEFAULT_CONSTANTS.ANNOTATION_CHANNEL_SOURCE] = channel_source
    annotations[DEFAULT_CONSTANTS.ANNOTATION_CHANNEL] = channel.key
    annotations[DEFAULT_CONSTANTS.ANNOTATION_IS_GENERATED] = "true"

    version = (source.annotations or {}).get(
        DEFAULT_CONSTANTS.ANNOTATION_DEPLOYABLE_VERSION
    )
    if version is not None:
        annotations[DEFAULT_CONSTANTS.ANNOTATION_DEPLOYABLE_VERSION] = version

    return annotations


def generate_deployable_for_channel(
    source: Deployable | None,
    channel: Channel | ChannelRef,
) -> Deployable | None:
    """Build the projection of a deployable into a channel.

    The result is not persisted; the caller creates it through the store,
    which assigns the final name from the generate-name.

    Args:
        source: Deployable to project (None yields None)
        channel: Target channel, or a fully qualified reference to it

    Returns:
        New Deployable in the channel's namespace, or None

    Raises:
        ValueError: If ``channel`` is a reference without a namespace
    """
    if source is None:
        return None

    if not channel.namespace:
        raise ValueError(f"Channel reference '{channel.name}' has no namespace")

    spec = source.spec.model_copy(deep=True)
    for excluded in DEFAULT_CONSTANTS.PROJECTION_EXCLUDED_SPEC_FIELDS:
        setattr(spec, excluded, None)

    metadata = ObjectMeta(
        generate_name=generated_name_prefix(source),
        namespace=channel.namespace,
        labels=dict(source.labels or {}),
        annotations=_projection_annotations(source, channel),
        owner_references=_owner_references(source),
    )

    return Deployable(
        api_version=source.api_version,
        kind=source.kind,
        metadata=metadata,
        spec=spec,
    )


async def cleanup_deployables(
    store: DeployableStore,
    channel: Channel | ChannelRef,
) -> CleanupReport:
    """Delete every deployable in a channel's namespace that lists the channel.

    All deletes are attempted even when some fail.

    Args:
        store: Deployable store
        channel: Channel being retired

    Returns:
        CleanupReport with the identities of the deleted deployables

    Raises:
        StoreError: If listing the channel namespace fails
        CleanupError: If one or more deletes fail; carries every failure
    """
    try:
        deployables = await store.list_deployables(namespace=channel.namespace)
    except StoreError as e:
        logger.error(f"Failed to list deployables for channel {channel.key}: {e}")
        raise StoreError(
            f"Failed to list deployables while cleaning up channel {channel.key}",
            details=e.details or e.message,
        ) from e

    report = CleanupReport(channel=channel.key)
    failures: list[tuple[str, Exception]] = []

    for dpl in deployables:
        if not dpl.references_channel(channel):
            continue

        try:
            await store.delete_deployable(dpl)
        except StoreError as e:
            logger.error(
                f"Failed to delete deployable {dpl.key} for channel {channel.key}: {e}"
            )
            failures.append((dpl.key, e))
            continue

        report.deleted.append(dpl.key)

    if failures:
        raise CleanupError(channel.key, failures, deleted=report.deleted)

    logger.info(
        f"Cleaned up {len(report.deleted)} deployable(s) for channel {channel.key}"
    )
    return report
