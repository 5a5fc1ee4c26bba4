"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.config.config_loader import get_config, load_config
from src.app.runtime.log_config import configure_logging
from src.cli.shared.console import CLIConsole, console
from src.infra.k8s import DeployableStore, build_deployable_store


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    config: ConfigData
    store: DeployableStore


def build_cli_context(config_path: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext.

    Args:
        config_path: Configuration file to load (default config.yaml, or
                     built-in defaults when it does not exist)
    """
    config = load_config(config_path) if config_path else get_config()
    configure_logging(config.logging)

    return CLIContext(
        console=console,
        config=config,
        store=build_deployable_store(config.store),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
