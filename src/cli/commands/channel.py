"""Channel commands.

This module provides commands for listing channel gates and retiring
channels by removing the deployables that reference them.
"""

from typing import Annotated

import typer
from rich.table import Table

from src.app.core.errors import CleanupError
from src.app.core.services import cleanup_deployables
from src.cli.context import get_cli_context
from src.cli.shared.console import with_error_handling
from src.infra.k8s import run_sync

from .shared import load_channel, parse_ref

# ---------------------------------------------------------------------------
# Typer App
# ---------------------------------------------------------------------------

channel_app = typer.Typer(
    name="channel",
    help="Channel inspection and cleanup.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@channel_app.command("list")
@with_error_handling
def list_channels(
    ctx: typer.Context,
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Namespace (default: all)"),
    ] = None,
) -> None:
    """List channels with their gates and source namespaces."""
    cli = get_cli_context(ctx)
    channels = run_sync(cli.store.list_channels(namespace))

    table = Table(title="Channels")
    table.add_column("Channel", style="cyan")
    table.add_column("Gate annotations")
    table.add_column("Source namespaces", style="dim")

    for ch in channels:
        if ch.gates is None:
            gate = "[dim]no gate[/dim]"
        else:
            gate = ", ".join(f"{k}={v}" for k, v in (ch.gate_annotations or {}).items())
        sources = ", ".join(ch.spec.source_namespaces or [])
        table.add_row(ch.key, gate, sources)

    cli.console.print(table)


@channel_app.command()
@with_error_handling
def cleanup(
    ctx: typer.Context,
    channel: Annotated[str, typer.Argument(help="Channel as namespace/name (or name)")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    skip_lookup: Annotated[
        bool,
        typer.Option(
            "--skip-lookup",
            help="Do not require the channel to exist (it may already be deleted)",
        ),
    ] = False,
) -> None:
    """Delete every deployable in the channel namespace that lists the channel.

    Examples:
        channel-sync channel cleanup ns2/gold
        channel-sync channel cleanup ns2/gold --skip-lookup --force
    """
    cli = get_cli_context(ctx)
    target = (
        parse_ref(channel, cli.config.store.namespace)
        if skip_lookup
        else load_channel(cli, channel).ref
    )

    if not cli.console.confirm_action(
        f"Delete deployables of channel {target.key}",
        details=f"Every deployable in namespace '{target.namespace}' listing "
        f"channel '{target.name}' will be deleted.",
        force=force,
    ):
        cli.console.info("Cleanup cancelled")
        raise typer.Exit(0)

    try:
        report = run_sync(cleanup_deployables(cli.store, target))
    except CleanupError as e:
        for key in e.deleted:
            cli.console.print(f"[dim]deleted {key}[/dim]")
        raise

    for key in report.deleted:
        cli.console.print(f"[dim]deleted {key}[/dim]")
    cli.console.ok(f"Deleted {len(report.deleted)} deployable(s) for {report.channel}")
