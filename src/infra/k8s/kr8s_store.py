"""Kr8s-based implementation of DeployableStore.

Uses the kr8s library for native async access to the Deployable and
Channel custom resources.
"""

from __future__ import annotations

from typing import Any, override

import kr8s
from kr8s.asyncio.objects import new_class
from loguru import logger

from src.app.core.errors import StoreError
from src.app.core.models import Channel, Deployable, namespaced_key
from src.infra.constants import DEFAULT_CONSTANTS

from .store import DeployableStore

DeployableResource = new_class(
    kind=DEFAULT_CONSTANTS.DEPLOYABLE_KIND,
    version=DEFAULT_CONSTANTS.API_VERSION,
    namespaced=True,
    plural=DEFAULT_CONSTANTS.DEPLOYABLE_PLURAL,
)

ChannelResource = new_class(
    kind=DEFAULT_CONSTANTS.CHANNEL_KIND,
    version=DEFAULT_CONSTANTS.API_VERSION,
    namespaced=True,
    plural=DEFAULT_CONSTANTS.CHANNEL_PLURAL,
)


class Kr8sDeployableStore(DeployableStore):
    """Deployable store using the kr8s library.

    Note: The kr8s API client is NOT cached because it's tied to the event loop
    that was running when created. When using run_sync() which calls asyncio.run(),
    each call creates a new event loop, making the cached API unusable.
    """

    def __init__(
        self,
        *,
        kubeconfig: str | None = None,
        context: str | None = None,
    ) -> None:
        """Initialize the kr8s store.

        Args:
            kubeconfig: Path to a kubeconfig file (kr8s default if None)
            context: Kubeconfig context to use (current context if None)
        """
        self.kubeconfig = kubeconfig
        self.context = context

    async def _get_api(self) -> Any:  # Returns kr8s._api.Api
        """Create a kr8s API client bound to the running event loop."""
        return await kr8s.asyncio.api(kubeconfig=self.kubeconfig, context=self.context)

    # =========================================================================
    # Deployable Operations
    # =========================================================================

    @override
    async def list_deployables(self, namespace: str | None = None) -> list[Deployable]:
        scope = namespace or "all namespaces"
        try:
            api = await self._get_api()
            return [
                Deployable.from_manifest(obj.raw)
                async for obj in DeployableResource.list(
                    namespace=namespace or kr8s.ALL, api=api
                )
            ]
        except Exception as e:
            logger.error(f"Failed to list deployables in {scope}: {e}")
            raise StoreError(
                f"Failed to list deployables in {scope}", details=str(e)
            ) from e

    @override
    async def get_deployable(self, name: str, namespace: str) -> Deployable | None:
        try:
            api = await self._get_api()
            obj = await DeployableResource.get(name, namespace=namespace, api=api)
            return Deployable.from_manifest(obj.raw)
        except kr8s.NotFoundError:
            return None
        except Exception as e:
            key = namespaced_key(namespace, name)
            raise StoreError(f"Failed to get deployable {key}", details=str(e)) from e

    @override
    async def create_deployable(self, deployable: Deployable) -> Deployable:
        target = deployable.key if deployable.name else (
            f"{deployable.namespace}/{deployable.generate_name}*"
        )
        try:
            api = await self._get_api()
            obj = DeployableResource(deployable.to_manifest(), api=api)
            await obj.create()
            return Deployable.from_manifest(obj.raw)
        except Exception as e:
            logger.error(f"Failed to create deployable {target}: {e}")
            raise StoreError(
                f"Failed to create deployable {target}", details=str(e)
            ) from e

    @override
    async def delete_deployable(self, deployable: Deployable) -> None:
        try:
            api = await self._get_api()
            obj = DeployableResource(deployable.to_manifest(), api=api)
            await obj.delete()
        except kr8s.NotFoundError as e:
            raise StoreError(f'deployable "{deployable.key}" not found') from e
        except Exception as e:
            raise StoreError(
                f"Failed to delete deployable {deployable.key}", details=str(e)
            ) from e

    # =========================================================================
    # Channel Operations
    # =========================================================================

    @override
    async def list_channels(self, namespace: str | None = None) -> list[Channel]:
        scope = namespace or "all namespaces"
        try:
            api = await self._get_api()
            return [
                Channel.from_manifest(obj.raw)
                async for obj in ChannelResource.list(
                    namespace=namespace or kr8s.ALL, api=api
                )
            ]
        except Exception as e:
            logger.error(f"Failed to list channels in {scope}: {e}")
            raise StoreError(f"Failed to list channels in {scope}", details=str(e)) from e

    @override
    async def get_channel(self, name: str, namespace: str) -> Channel | None:
        try:
            api = await self._get_api()
            obj = await ChannelResource.get(name, namespace=namespace, api=api)
            return Channel.from_manifest(obj.raw)
        except kr8s.NotFoundError:
            return None
        except Exception as e:
            key = namespaced_key(namespace, name)
            raise StoreError(f"Failed to get channel {key}", details=str(e)) from e
