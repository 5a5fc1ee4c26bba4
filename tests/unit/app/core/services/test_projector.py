"""Tests for channel projection and cleanup."""

from unittest.mock import AsyncMock

import pytest

from src.app.core.errors import CleanupError, StoreError
from src.app.core.models import ChannelRef
from src.app.core.services.projector import (
    cleanup_deployables,
    generate_deployable_for_channel,
)
from src.infra.constants import DEFAULT_CONSTANTS
from tests.fixtures import (
    CHANNEL,
    CHANNEL_SOURCE,
    make_channel,
    make_deployable,
    make_projection,
)

IS_LOCAL = DEFAULT_CONSTANTS.ANNOTATION_IS_LOCAL
IS_GENERATED = DEFAULT_CONSTANTS.ANNOTATION_IS_GENERATED
VERSION = DEFAULT_CONSTANTS.ANNOTATION_DEPLOYABLE_VERSION


class TestGenerateDeployableForChannel:
    """Test building projections of deployables."""

    def test_root_projection(self):
        """A root in ns1 projected into ns2/C points back at ns1/R."""
        root = make_deployable(
            "R",
            "ns1",
            uid="uid-r",
            annotations={"tier": "gold"},
            labels={"app": "r"},
            channels=["C"],
        )
        channel = make_channel("C", "ns2", gate_annotations={"tier": "gold"})

        projection = generate_deployable_for_channel(root, channel)

        assert projection is not None
        assert projection.metadata.name is None
        assert projection.generate_name == "R-"
        assert projection.namespace == "ns2"
        assert projection.labels == {"app": "r"}
        assert projection.annotations == {
            "tier": "gold",
            IS_LOCAL: "false",
            CHANNEL_SOURCE: "ns1/R",
            CHANNEL: "ns2/C",
            IS_GENERATED: "true",
        }
        assert projection.spec.channels == ["C"]
        assert projection.spec.template == root.spec.template

        owners = projection.metadata.owner_references
        assert owners is not None and len(owners) == 1
        assert owners[0].name == "R"
        assert owners[0].uid == "uid-r"
        assert owners[0].kind == DEFAULT_CONSTANTS.DEPLOYABLE_KIND
        assert owners[0].api_version == DEFAULT_CONSTANTS.API_VERSION

    def test_projection_of_projection_keeps_root(self):
        """Channel-source always names the original root."""
        root = make_deployable("R", "ns1")
        first = make_projection(root, make_channel("C", "ns2"), "R-x7k2p")
        channel = make_channel("D", "ns3")

        second = generate_deployable_for_channel(first, channel)

        assert second is not None
        assert second.annotations is not None
        assert second.annotations[CHANNEL_SOURCE] == "ns1/R"
        assert second.annotations[CHANNEL] == "ns3/D"
        assert second.generate_name == "R--"
        assert second.metadata.owner_references is not None
        assert second.metadata.owner_references[0].name == "R-x7k2p"

    def test_excluded_spec_fields_are_dropped(self):
        root = make_deployable(
            spec={
                "template": {"kind": "ConfigMap"},
                "placement": {"local": True},
                "overrides": [{"clusterName": "c1"}],
                "dependencies": [{"name": "dep"}],
            }
        )

        projection = generate_deployable_for_channel(root, make_channel())

        assert projection is not None
        dumped = projection.to_manifest()["spec"]
        assert dumped == {"template": {"kind": "ConfigMap"}}
        # Source is untouched
        assert root.spec.placement == {"local": True}

    def test_deployable_version_is_carried(self):
        root = make_deployable(annotations={VERSION: "3"})
        projection = generate_deployable_for_channel(root, make_channel())
        assert projection is not None
        assert projection.annotations is not None
        assert projection.annotations[VERSION] == "3"

    def test_projection_does_not_share_state(self):
        root = make_deployable(annotations={"k": "v"}, labels={"app": "r"})
        projection = generate_deployable_for_channel(root, make_channel())
        assert projection is not None

        projection.labels["app"] = "changed"  # type: ignore[index]
        projection.spec.template["kind"] = "Secret"  # type: ignore[index]

        assert root.labels == {"app": "r"}
        assert root.annotations == {"k": "v"}
        assert root.spec.template == {"kind": "ConfigMap", "apiVersion": "v1"}

    def test_none_source_yields_none(self):
        assert generate_deployable_for_channel(None, make_channel()) is None

    def test_qualified_reference_is_accepted(self):
        projection = generate_deployable_for_channel(
            make_deployable(), ChannelRef(name="gold", namespace="ns2")
        )
        assert projection is not None
        assert projection.namespace == "ns2"

    def test_unqualified_reference_is_rejected(self):
        with pytest.raises(ValueError, match="no namespace"):
            generate_deployable_for_channel(make_deployable(), ChannelRef(name="gold"))

    def test_generation_is_deterministic(self):
        root = make_deployable(annotations={"k": "v"})
        channel = make_channel()
        first = generate_deployable_for_channel(root, channel)
        second = generate_deployable_for_channel(root, channel)
        assert first is not None and second is not None
        assert first.to_manifest() == second.to_manifest()


class TestCleanupDeployables:
    """Test removing the deployables of a retired channel."""

    @pytest.mark.asyncio
    async def test_deletes_only_matching_deployables(self, memory_store):
        channel = make_channel("gold", "ns2")
        memory_store.put_deployable(make_deployable("a", "ns2", channels=["gold"]))
        memory_store.put_deployable(make_deployable("b", "ns2", channels=["ns2/gold"]))
        memory_store.put_deployable(make_deployable("c", "ns2", channels=["silver"]))
        memory_store.put_deployable(make_deployable("d", "ns2"))
        memory_store.put_deployable(make_deployable("e", "ns3", channels=["gold"]))

        report = await cleanup_deployables(memory_store, channel)

        assert report.channel == "ns2/gold"
        assert sorted(report.deleted) == ["ns2/a", "ns2/b"]
        remaining = {d.key for d in await memory_store.list_deployables()}
        assert remaining == {"ns2/c", "ns2/d", "ns3/e"}

    @pytest.mark.asyncio
    async def test_nothing_to_delete(self, memory_store):
        report = await cleanup_deployables(memory_store, make_channel())
        assert report.deleted == []

    @pytest.mark.asyncio
    async def test_lists_only_channel_namespace(self):
        store = AsyncMock()
        store.list_deployables.return_value = []

        await cleanup_deployables(store, make_channel("gold", "ns2"))

        store.list_deployables.assert_awaited_once_with(namespace="ns2")

    @pytest.mark.asyncio
    async def test_list_failure_raises_store_error(self):
        store = AsyncMock()
        store.list_deployables.side_effect = StoreError("boom")

        with pytest.raises(StoreError) as excinfo:
            await cleanup_deployables(store, make_channel())

        assert "ns2/gold" in excinfo.value.message
        store.delete_deployable.assert_not_called()

    @pytest.mark.asyncio
    async def test_attempts_every_delete_and_aggregates_failures(self):
        store = AsyncMock()
        store.list_deployables.return_value = [
            make_deployable("a", "ns2", channels=["gold"]),
            make_deployable("b", "ns2", channels=["gold"]),
            make_deployable("c", "ns2", channels=["gold"]),
        ]
        store.delete_deployable.side_effect = [
            StoreError("denied"),
            None,
            StoreError("gone"),
        ]

        with pytest.raises(CleanupError) as excinfo:
            await cleanup_deployables(store, make_channel())

        error = excinfo.value
        assert store.delete_deployable.await_count == 3
        assert error.channel == "ns2/gold"
        assert [key for key, _ in error.failures] == ["ns2/a", "ns2/c"]
        assert error.deleted == ["ns2/b"]
        assert error.details is not None
        assert "ns2/a: denied" in error.details
        assert "ns2/c: gone" in error.details
