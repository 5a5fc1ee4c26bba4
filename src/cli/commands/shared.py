"""Shared helpers for CLI commands.

Resolves ``namespace/name`` arguments against the configured store and
renders resources for display.
"""

from rich.table import Table

from src.app.core.errors import PropagationError
from src.app.core.models import Channel, ChannelRef, Deployable
from src.cli.context import CLIContext
from src.infra.k8s import run_sync


def parse_ref(value: str, default_namespace: str) -> ChannelRef:
    """Parse a ``namespace/name`` argument; bare names use the default namespace."""
    ref = ChannelRef.parse(value, default_namespace=default_namespace)
    if not ref.name:
        raise PropagationError(f"Invalid resource reference '{value}'")
    return ref


def load_deployable(ctx: CLIContext, value: str) -> Deployable:
    """Fetch a deployable named on the command line.

    Raises:
        PropagationError: If the deployable does not exist
    """
    ref = parse_ref(value, ctx.config.store.namespace)
    deployable = run_sync(ctx.store.get_deployable(ref.name, ref.namespace))
    if deployable is None:
        raise PropagationError(f"Deployable {ref.key} not found")
    return deployable


def load_channel(ctx: CLIContext, value: str) -> Channel:
    """Fetch a channel named on the command line.

    Raises:
        PropagationError: If the channel does not exist
    """
    ref = parse_ref(value, ctx.config.store.namespace)
    channel = run_sync(ctx.store.get_channel(ref.name, ref.namespace))
    if channel is None:
        raise PropagationError(f"Channel {ref.key} not found")
    return channel


def load_channels(ctx: CLIContext, values: list[str] | None) -> list[Channel]:
    """Fetch the named channels, or every channel when none are named."""
    if not values:
        return run_sync(ctx.store.list_channels())
    return [load_channel(ctx, value) for value in values]


def verdict(allowed: bool) -> str:
    return "[green]allowed[/green]" if allowed else "[red]denied[/red]"


def deployables_table(title: str, rows: dict[str, Deployable]) -> Table:
    """Render deployables keyed by channel identity."""
    table = Table(title=title)
    table.add_column("Channel", style="cyan")
    table.add_column("Deployable")
    table.add_column("Channel source", style="dim")

    for channel_key, deployable in rows.items():
        name = deployable.key if deployable.name else (
            f"{deployable.namespace}/{deployable.generate_name}*"
        )
        table.add_row(channel_key, name, deployable.channel_source)

    return table
