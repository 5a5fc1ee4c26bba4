"""Main CLI application module.

This module provides the main entry point for the channel-sync CLI.
Commands are organized by resource kind.

Command Groups:
- deployable: Gate checks, family inspection, projection and promotion
- channel: Channel listing and cleanup
"""

from pathlib import Path
from typing import Annotated

import typer

from .commands import channel_app, deployable_app
from .context import CLIContext, build_cli_context

# Create the main CLI application
app = typer.Typer(
    help="🛰️  channel-sync - Deployable channel promotion tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(deployable_app, name="deployable")
app.add_typer(channel_app, name="channel")


@app.callback()
def _configure(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Configuration file (default: config.yaml)",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Build the shared CLI context unless one was injected."""
    if not isinstance(ctx.obj, CLIContext):
        ctx.obj = build_cli_context(config)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
