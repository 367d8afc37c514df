"""Config command for viewing and managing optiongate configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    VALID_CONTEXTS,
    VALID_LOG_LEVELS,
    get_config,
    reset_config,
)


VALID_KEYS = {
    "engine.recheck_delay",
    "engine.settings_page_marker",
    "engine.default_context",
    "cli.log_level",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. engine.recheck_delay)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify optiongate configuration.

    Examples:
        optiongate config show
        optiongate config set engine.recheck_delay 0.8
        optiongate config set engine.default_context embedded
        optiongate config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] optiongate config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]optiongate Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Engine[/bold cyan]")
    console.print(f"  recheck_delay        = {config.engine.recheck_delay}")
    console.print(f"  settings_page_marker = {config.engine.settings_page_marker}")
    console.print(f"  default_context      = {config.engine.default_context}")

    console.print()
    console.print("[bold cyan]CLI[/bold cyan]")
    console.print(f"  log_level = {config.cli.log_level}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    section, field_name = key.split(".", 1)
    target = config.engine if section == "engine" else config.cli

    if field_name == "recheck_delay":
        try:
            delay = float(value)
        except ValueError:
            console.print(f"[red]Invalid number:[/red] {value}")
            raise typer.Exit(1)
        if delay < 0:
            console.print(f"[red]Invalid number:[/red] {value} (must be >= 0)")
            raise typer.Exit(1)
        target.recheck_delay = delay
    elif field_name == "default_context":
        if value not in VALID_CONTEXTS:
            console.print(
                f"[red]Invalid context:[/red] {value} (expected {', '.join(VALID_CONTEXTS)})"
            )
            raise typer.Exit(1)
        target.default_context = value
    elif field_name == "log_level":
        if value.upper() not in VALID_LOG_LEVELS:
            console.print(
                f"[red]Invalid log level:[/red] {value} (expected {', '.join(VALID_LOG_LEVELS)})"
            )
            raise typer.Exit(1)
        target.log_level = value.upper()
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
