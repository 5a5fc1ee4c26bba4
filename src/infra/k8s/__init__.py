"""Kubernetes infrastructure abstraction layer.

This module provides the DeployableStore abstraction over the Deployable and
Channel custom resources, with a kr8s backend and an in-memory backend.

Example:
    from src.infra.k8s import InMemoryDeployableStore, run_sync

    store = InMemoryDeployableStore()
    deployables = run_sync(store.list_deployables("my-namespace"))
"""

from .helpers import build_deployable_store
from .memory_store import InMemoryDeployableStore
from .store import DeployableStore
from .utils import run_sync

__all__ = [
    # Store classes
    "DeployableStore",
    "InMemoryDeployableStore",
    # Utilities
    "build_deployable_store",
    "run_sync",
]
