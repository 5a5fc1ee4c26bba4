"""Tests for CLI context dependency injection."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from src.app.runtime.config.config_data import ConfigData, StoreConfig
from src.cli.context import CLIContext, build_cli_context, get_cli_context
from src.infra.k8s import InMemoryDeployableStore


def _context() -> CLIContext:
    return CLIContext(
        console=Mock(),
        config=ConfigData(),
        store=InMemoryDeployableStore(),
    )


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = _context()

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


@patch("src.cli.context.configure_logging")
@patch("src.cli.context.get_config")
def test_build_cli_context_uses_configured_store(mock_get_config, mock_logging):
    """Test that build_cli_context builds the store selected by config."""
    mock_get_config.return_value = ConfigData(store=StoreConfig(backend="memory"))

    ctx = build_cli_context()

    assert isinstance(ctx.store, InMemoryDeployableStore)
    assert ctx.config.store.backend == "memory"
    assert ctx.console is not None
    mock_logging.assert_called_once_with(ctx.config.logging)


@patch("src.cli.context.configure_logging")
@patch("src.cli.context.build_deployable_store")
@patch("src.cli.context.load_config")
def test_build_cli_context_loads_explicit_config(
    mock_load_config, mock_build_store, mock_logging
):
    """Test that an explicit config path is loaded instead of the cached config."""
    mock_load_config.return_value = ConfigData()
    mock_build_store.return_value = Mock()

    ctx = build_cli_context(Path("/test/config.yaml"))

    mock_load_config.assert_called_once_with(Path("/test/config.yaml"))
    mock_build_store.assert_called_once_with(mock_load_config.return_value.store)
    assert ctx.store is mock_build_store.return_value


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    mock_ctx_obj = _context()

    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = mock_ctx_obj

    assert get_cli_context(typer_ctx) is mock_ctx_obj


def test_get_cli_context_with_invalid_obj_falls_back():
    """Test that get_cli_context falls back when ctx.obj is not CLIContext."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"

    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(typer_ctx)

        mock_build.assert_called_once()


@patch("click.get_current_context")
def test_get_cli_context_uses_click_context_as_fallback(mock_get_click_ctx):
    """Test that get_cli_context uses click context when typer ctx is None."""
    mock_ctx_obj = _context()

    mock_click_context = Mock()
    mock_click_context.obj = mock_ctx_obj
    mock_get_click_ctx.return_value = mock_click_context

    result = get_cli_context(None)

    assert result is mock_ctx_obj
    mock_get_click_ctx.assert_called_once_with(silent=True)
