"""Deployable commands.

This module provides commands for checking channel gates, inspecting the
family of a deployable and promoting deployables into channels.
"""

from typing import Annotated

import typer
import yaml
from rich.table import Table

from src.app.core.services import (
    ChannelPropagator,
    PropagationResult,
    generate_deployable_for_channel,
    resolve_family,
    validate_in_channel,
    validate_to_channel,
)
from src.cli.context import CLIContext, get_cli_context
from src.cli.shared.console import with_error_handling
from src.infra.k8s import run_sync

from .shared import (
    deployables_table,
    load_channel,
    load_channels,
    load_deployable,
    verdict,
)

# ---------------------------------------------------------------------------
# Typer App
# ---------------------------------------------------------------------------

deployable_app = typer.Typer(
    name="deployable",
    help="Deployable gate checks, family inspection and promotion.",
    no_args_is_help=True,
)

DeployableArg = Annotated[
    str, typer.Argument(help="Deployable as namespace/name (or name)")
]
ChannelArg = Annotated[str, typer.Argument(help="Channel as namespace/name (or name)")]


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------


def _print_result(cli: CLIContext, result: PropagationResult, dry_run: bool) -> None:
    rows = result.planned if dry_run else result.created
    title = "Planned projections" if dry_run else "Created projections"
    if rows:
        cli.console.print(deployables_table(f"{title} of {result.deployable}", rows))
    if result.existing:
        cli.console.print(
            deployables_table(f"Existing projections of {result.deployable}", result.existing)
        )
    for channel_key in result.resident:
        cli.console.print(f"[dim]{result.deployable} already in {channel_key}[/dim]")
    for channel_key in result.denied:
        cli.console.print(f"[dim]{result.deployable} denied by {channel_key}[/dim]")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@deployable_app.command()
@with_error_handling
def check(ctx: typer.Context, deployable: DeployableArg, channel: ChannelArg) -> None:
    """Check whether a deployable may sit in, or be promoted to, a channel.

    Examples:
        channel-sync deployable check ns1/app ns2/gold
    """
    cli = get_cli_context(ctx)
    dpl = load_deployable(cli, deployable)
    ch = load_channel(cli, channel)

    table = Table(title=f"{dpl.key} → {ch.key}")
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    table.add_row("In channel", verdict(validate_in_channel(dpl, ch)))
    table.add_row("Promote to channel", verdict(validate_to_channel(dpl, ch)))
    cli.console.print(table)


@deployable_app.command()
@with_error_handling
def family(
    ctx: typer.Context,
    deployable: DeployableArg,
    channel_namespaces: Annotated[
        list[str] | None,
        typer.Option(
            "--channel-namespace",
            "-c",
            help="Channel namespace to search (default: namespaces of all channels)",
        ),
    ] = None,
) -> None:
    """Show the parent and channel projections of a deployable.

    Examples:
        channel-sync deployable family ns1/app
        channel-sync deployable family ns1/app -c ns2 -c ns3
    """
    cli = get_cli_context(ctx)
    dpl = load_deployable(cli, deployable)

    namespaces = set(channel_namespaces or [])
    if not namespaces:
        namespaces = {ch.namespace for ch in run_sync(cli.store.list_channels())}

    result = run_sync(resolve_family(cli.store, dpl, namespaces))

    parent = result.parent.key if result.parent else "[dim]none[/dim]"
    cli.console.print(f"[bold]Parent:[/bold] {parent}")
    if result.children:
        cli.console.print(deployables_table(f"Projections of {dpl.key}", result.children))
    else:
        cli.console.print("[dim]No channel projections found[/dim]")


@deployable_app.command()
@with_error_handling
def project(ctx: typer.Context, deployable: DeployableArg, channel: ChannelArg) -> None:
    """Print the projection of a deployable into a channel as YAML.

    Nothing is written to the cluster.

    Examples:
        channel-sync deployable project ns1/app ns2/gold > projection.yaml
    """
    cli = get_cli_context(ctx)
    dpl = load_deployable(cli, deployable)
    ch = load_channel(cli, channel)

    projection = generate_deployable_for_channel(dpl, ch)
    if projection is None:
        return
    typer.echo(yaml.safe_dump(projection.to_manifest(), sort_keys=False), nl=False)


@deployable_app.command()
@with_error_handling
def propagate(
    ctx: typer.Context,
    deployable: Annotated[
        str | None,
        typer.Argument(help="Deployable as namespace/name (default: all roots)"),
    ] = None,
    channels: Annotated[
        list[str] | None,
        typer.Option(
            "--channel",
            "-c",
            help="Candidate channel as namespace/name (default: all channels)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show projections without creating them"),
    ] = False,
) -> None:
    """Promote deployables into the channels they may enter.

    Examples:
        channel-sync deployable propagate ns1/app
        channel-sync deployable propagate --channel ns2/gold --dry-run
    """
    cli = get_cli_context(ctx)
    candidates = load_channels(cli, channels)
    propagator = ChannelPropagator(cli.store)

    if deployable:
        dpl = load_deployable(cli, deployable)
        results = [run_sync(propagator.propagate(dpl, candidates, dry_run=dry_run))]
    else:
        results = run_sync(propagator.propagate_all(candidates, dry_run=dry_run))

    for result in results:
        _print_result(cli, result, dry_run)

    created = sum(len(r.created) for r in results)
    if dry_run:
        planned = sum(len(r.planned) for r in results)
        cli.console.info(f"{planned} projection(s) would be created")
    else:
        cli.console.ok(f"Created {created} projection(s)")
