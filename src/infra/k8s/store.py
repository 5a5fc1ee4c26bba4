"""Abstract deployable store interface.

Defines the contract for reading and writing Deployable and Channel
resources, implemented by different backends (kr8s library, in-memory).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.app.core.models import Channel, Deployable


class DeployableStore(ABC):
    """Abstract base class for Deployable and Channel storage.

    All methods are async to support the kr8s backend. Use `run_sync()` to
    call from synchronous code. Backends raise `StoreError` on failure.

    Example:
        from src.infra.k8s import InMemoryDeployableStore, run_sync

        store = InMemoryDeployableStore()
        deployables = run_sync(store.list_deployables("my-namespace"))
    """

    # =========================================================================
    # Deployable Operations
    # =========================================================================

    @abstractmethod
    async def list_deployables(self, namespace: str | None = None) -> list[Deployable]:
        """List deployables.

        Args:
            namespace: Namespace to list, or None for all namespaces

        Returns:
            List of Deployable objects
        """
        ...

    @abstractmethod
    async def get_deployable(self, name: str, namespace: str) -> Deployable | None:
        """Get a deployable by name.

        Args:
            name: Deployable name
            namespace: Kubernetes namespace

        Returns:
            Deployable, or None if not found
        """
        ...

    @abstractmethod
    async def create_deployable(self, deployable: Deployable) -> Deployable:
        """Create a deployable.

        A deployable without a name is named from its generate-name.

        Args:
            deployable: Deployable to create

        Returns:
            The created Deployable as stored (name and uid assigned)
        """
        ...

    @abstractmethod
    async def delete_deployable(self, deployable: Deployable) -> None:
        """Delete a deployable.

        Args:
            deployable: Deployable to delete
        """
        ...

    # =========================================================================
    # Channel Operations
    # =========================================================================

    @abstractmethod
    async def list_channels(self, namespace: str | None = None) -> list[Channel]:
        """List channels.

        Args:
            namespace: Namespace to list, or None for all namespaces

        Returns:
            List of Channel objects
        """
        ...

    @abstractmethod
    async def get_channel(self, name: str, namespace: str) -> Channel | None:
        """Get a channel by name.

        Args:
            name: Channel name
            namespace: Kubernetes namespace

        Returns:
            Channel, or None if not found
        """
        ...
