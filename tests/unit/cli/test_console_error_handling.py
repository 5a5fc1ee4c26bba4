from unittest.mock import Mock

import pytest
import typer

from src.app.core.errors import CleanupError, StoreError
from src.cli.shared.console import CLIConsole, with_error_handling


def test_with_error_handling_handles_store_error():
    @with_error_handling
    def _command() -> None:
        raise StoreError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_cleanup_error():
    @with_error_handling
    def _command() -> None:
        raise CleanupError("ns2/gold", [("ns2/a", StoreError("denied"))])

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_leaves_other_errors_alone():
    @with_error_handling
    def _command() -> None:
        raise ValueError("unexpected")

    with pytest.raises(ValueError):
        _command()


def test_confirm_action_with_force_skips_prompt():
    cli_console = CLIConsole()
    cli_console.console = Mock()

    assert cli_console.confirm_action("Delete deployables", force=True) is True
    cli_console.console.input.assert_not_called()


def test_handle_error_exits_with_code():
    cli_console = CLIConsole()
    cli_console.console = Mock()

    with pytest.raises(typer.Exit) as excinfo:
        cli_console.handle_error("Boom", details="extra", exit_code=2)

    assert excinfo.value.exit_code == 2
    assert cli_console.console.print.call_count == 2


def test_console_exposes_only_used_helpers():
    for name in ("print", "info", "ok", "error", "confirm_action", "handle_error"):
        assert callable(getattr(CLIConsole, name))
    for name in ("status", "warn", "print_header"):
        assert not hasattr(CLIConsole, name)
