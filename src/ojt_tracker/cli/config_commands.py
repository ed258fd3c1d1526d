"""CLI commands for configuration management."""

import json
import shutil
import sys
from typing import Any, Iterator, NoReturn, Optional

import click  # type: ignore[import-not-found]
import yaml  # type: ignore[import-untyped]
from rich.console import Console  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from ojt_tracker.cli.context import load_config

console = Console()
error_console = Console(stderr=True)

SECRET_KEYS = {"api.authentication.secret_key"}


def _settings(data: dict[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (dotted key, value) for every leaf of a nested settings dict."""
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _settings(value, dotted)
        else:
            yield dotted, value


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


@click.group()  # type: ignore[misc]
def config() -> None:
    """Manage OJT Tracker configuration.

    Configuration is stored in ~/.ojt-tracker/config.yml unless --config
    or $OJT_TRACKER_CONFIG points elsewhere.
    """
    pass


@config.command("show")  # type: ignore[misc]
@click.argument("section", required=False)  # type: ignore[misc]
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_show(ctx: click.Context, section: Optional[str], as_json: bool) -> None:
    """Show configuration settings, optionally limited to one SECTION.

    Example:
        ojt-tracker config show
        ojt-tracker config show api.authentication
        ojt-tracker config show --json
    """
    settings = load_config(ctx)
    data = settings.to_dict() if section is None else settings.get(section)

    if not isinstance(data, dict):
        _fail(f"'{section}' is not a configuration section")

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title=f"OJT Tracker Configuration{f' ({section})' if section else ''}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key, value in _settings(data, section or ""):
        table.add_row(key, "********" if key in SECRET_KEYS and value else str(value))

    console.print(table)
    console.print(f"\nConfig file: {settings.config_path}")


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Print one configuration value by its dotted key.

    Example:
        ojt-tracker config get tracking.default_required_hours
    """
    value = load_config(ctx).get(key)

    if value is None:
        _fail(f"Configuration key '{key}' not found")

    click.echo(json.dumps(value, indent=2) if isinstance(value, (dict, list)) else str(value))


@config.command("set")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.argument("value")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Store a configuration value.

    Values are parsed as YAML scalars: 'true'/'false' become booleans,
    numbers become numbers, 'null' clears the value.

    Example:
        ojt-tracker config set api.port 8080
        ojt-tracker config set api.compat.legacy_not_found_status true
        ojt-tracker config set tracking.default_required_hours 486
    """
    settings = load_config(ctx)

    try:
        parsed: Any = yaml.safe_load(value)
    except yaml.YAMLError:
        parsed = value

    try:
        settings.set(key, parsed)
    except ValueError as e:
        _fail(str(e))

    console.print(f"[green]✓[/green] {key} = {parsed}")


@config.command("reset")  # type: ignore[misc]
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_reset(ctx: click.Context, yes: bool) -> None:
    """Restore default configuration, keeping a copy of the current file.

    The API secret key is reset too, which invalidates every issued token.

    Example:
        ojt-tracker config reset --yes
    """
    settings = load_config(ctx)

    if not yes and not click.confirm("Reset all configuration (and the API secret key) to defaults?"):
        console.print("Cancelled")
        return

    if settings.config_path.exists():
        saved = settings.config_path.with_suffix(".yml.backup")
        shutil.copy(settings.config_path, saved)
        console.print(f"Previous configuration saved to {saved}")

    settings.reset()
    console.print("[green]✓[/green] Configuration reset to defaults")


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Show path to configuration file."""
    click.echo(str(load_config(ctx).config_path))
