"""Shared helpers for CLI commands."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ojt_tracker.core.config import ConfigManager
from ojt_tracker.core.log import setup_logging
from ojt_tracker.core.repository import EntryRepository, PreferenceRepository
from ojt_tracker.core.storage import StorageManager

error_console = Console(stderr=True)


def load_config(ctx: click.Context) -> ConfigManager:
    """Load the configuration selected by the root --config option."""
    obj = ctx.find_root().obj or {}
    if "config" not in obj:
        config_path: Optional[str] = obj.get("config_path")
        try:
            obj["config"] = ConfigManager(Path(config_path) if config_path else None)
        except ValueError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        setup_logging(obj["config"].get("logging.level", "INFO"), obj["config"].get("logging.file"))
    config: ConfigManager = obj["config"]
    return config


def load_repositories(ctx: click.Context) -> tuple[EntryRepository, PreferenceRepository]:
    """Build entry and preference repositories over the configured data dir."""
    config = load_config(ctx)
    storage = StorageManager(config.data_dir)
    return (
        EntryRepository(storage),
        PreferenceRepository(storage, config.get("tracking.default_required_hours", 500)),
    )
