from __future__ import annotations

from pathlib import Path

from src.app.runtime.config.config_data import StoreConfig
from src.infra.k8s.store import DeployableStore


def build_deployable_store(config: StoreConfig) -> DeployableStore:
    """Create the DeployableStore selected by configuration.

    Args:
        config: Store section of the application configuration

    Returns:
        An in-memory store (optionally seeded from a manifests file) or a
        kr8s-backed store
    """
    if config.backend == "memory":
        from src.infra.k8s.memory_store import InMemoryDeployableStore

        if config.manifests:
            return InMemoryDeployableStore.from_file(Path(config.manifests))
        return InMemoryDeployableStore()

    from src.infra.k8s.kr8s_store import Kr8sDeployableStore

    return Kr8sDeployableStore(kubeconfig=config.kubeconfig, context=config.context)
