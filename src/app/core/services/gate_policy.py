"""Channel gate policy.

Pure decision functions answering whether a deployable may reside in a
channel's namespace and whether it may be promoted into a channel. A denial
is a ``False`` result, never an exception; absent inputs are denied.
"""

from __future__ import annotations

from collections.abc import Mapping

from src.app.core.models import Channel, Deployable


def gate_annotations_match(
    annotations: Mapping[str, str] | None,
    gate_annotations: Mapping[str, str] | None,
) -> bool:
    """Check a deployable's annotations against a channel gate.

    Args:
        annotations: Annotations of the deployable (may be None)
        gate_annotations: Annotations required by the gate (may be None)

    Returns:
        True if the gate has no annotations, or every gate entry is present
        in ``annotations`` with an equal value
    """
    if gate_annotations is None:
        return True

    if annotations is None:
        return False

    for key, value in gate_annotations.items():
        if key not in annotations or annotations[key] != value:
            return False

    return True


def validate_in_channel(
    deployable: Deployable | None, channel: Channel | None
) -> bool:
    """Check whether a deployable rightfully sits in a channel.

    The deployable must live in the channel's namespace and pass its gate.
    """
    if deployable is None or channel is None:
        return False

    if deployable.namespace != channel.namespace:
        return False

    if channel.gates is None:
        return True

    return gate_annotations_match(deployable.annotations, channel.gate_annotations)


def validate_to_channel(
    deployable: Deployable | None, channel: Channel | None
) -> bool:
    """Check whether a deployable can be promoted into a channel.

    A deployable qualifies either by listing the channel in ``spec.channels``
    or, when the channel has gates, by living in one of the channel's source
    namespaces. A channel without gates is never reached through its source
    namespaces. Once qualified, the deployable must pass the gate.
    """
    if deployable is None or channel is None:
        return False

    found = deployable.references_channel(channel)

    if not found:
        if channel.gates is None:
            return False

        found = deployable.namespace in (channel.spec.source_namespaces or [])

    if not found:
        return False

    if channel.gates is None:
        return True

    return gate_annotations_match(deployable.annotations, channel.gate_annotations)
