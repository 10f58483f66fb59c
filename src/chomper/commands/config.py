"""Configuration management commands."""

from typing import Optional

import typer

from chomper.config import get_config_manager
from chomper.utils.errors import ChomperError
from chomper.utils.exit_codes import ERROR_INVALID_ARGS
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> str | None:
    """Strings are converted by the config model; none/null clears a value."""
    if value.lower() in ("none", "null"):
        return None
    return value


@app.command("view")
@command_wrapper(auth_required=False)
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("yaml", "--output", "-o", help="Output format (yaml/json)"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(mode="json"), output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.url)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager(profile)
    value = config_manager.get(key)
    if not config_manager.has(key):
        raise ChomperError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS)
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(mode="json"), "yaml")
        return
    console.print(value.value if hasattr(value, "value") else value)


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.url)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager(profile)
    parsed_value = _parse_value(value)
    try:
        config_manager.set(key, parsed_value)
    except KeyError as e:
        raise ChomperError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e
    except ValueError as e:
        raise ChomperError(
            f"Invalid value '{value}' for '{key}'", ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    config_manager = get_config_manager(profile)
    try:
        config_manager.reset(key)
    except KeyError as e:
        raise ChomperError(
            f"Configuration key '{key}' not found", ERROR_INVALID_ARGS
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
