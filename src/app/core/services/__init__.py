"""Core services exports."""

# Gate policy
from .gate_policy import gate_annotations_match, validate_in_channel, validate_to_channel

# Naming
from .naming import generated_name_prefix

# Relationship resolution
from .relationships import DeployableFamily, FamilyIndex, find_family, resolve_family

# Projection
from .projector import CleanupReport, cleanup_deployables, generate_deployable_for_channel

# Propagation
from .propagation import ChannelPropagator, PropagationResult

__all__ = [
    # Gate policy
    "gate_annotations_match",
    "validate_in_channel",
    "validate_to_channel",
    # Naming
    "generated_name_prefix",
    # Relationship resolution
    "DeployableFamily",
    "FamilyIndex",
    "find_family",
    "resolve_family",
    # Projection
    "CleanupReport",
    "cleanup_deployables",
    "generate_deployable_for_channel",
    # Propagation
    "ChannelPropagator",
    "PropagationResult",
]
