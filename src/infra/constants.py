"""Resource constants for channel propagation.

This module centralizes the API coordinates and annotation keys shared by the
policy, relationship and projection code as well as the store backends.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceConstants:
    """Constants for the Deployable and Channel custom resources.

    All attributes are class-level and immutable.
    """

    # API coordinates
    API_GROUP: str = "apps.open-cluster-management.io"
    API_VERSION: str = "apps.open-cluster-management.io/v1"
    DEPLOYABLE_KIND: str = "Deployable"
    DEPLOYABLE_PLURAL: str = "deployables"
    CHANNEL_KIND: str = "Channel"
    CHANNEL_PLURAL: str = "channels"

    # Annotation keys read and written on projections
    ANNOTATION_CHANNEL_SOURCE: str = "apps.open-cluster-management.io/channel-source"
    ANNOTATION_CHANNEL: str = "apps.open-cluster-management.io/channel"
    ANNOTATION_IS_GENERATED: str = "apps.open-cluster-management.io/is-generated"
    ANNOTATION_IS_LOCAL: str = "apps.open-cluster-management.io/is-local-deployable"
    ANNOTATION_DEPLOYABLE_VERSION: str = (
        "apps.open-cluster-management.io/deployable-version"
    )

    # Spec fields a projection never carries
    PROJECTION_EXCLUDED_SPEC_FIELDS: tuple[str, ...] = (
        "placement",
        "overrides",
        "dependencies",
    )

    # Separator of namespaced identity strings ("namespace/name")
    IDENTITY_SEPARATOR: str = "/"

    # Length of the random suffix appended to generated names
    GENERATED_NAME_SUFFIX_LENGTH: int = 5

    DEFAULT_NAMESPACE: str = "default"


DEFAULT_CONSTANTS = ResourceConstants()
