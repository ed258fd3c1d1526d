"""Dependency injection for FastAPI endpoints.

These dependencies give endpoints access to the configuration, storage and
repositories created by the application factory.
"""

from fastapi import Request  # type: ignore[import-untyped]

from ojt_tracker.core.config import ConfigManager
from ojt_tracker.core.repository import EntryRepository, PreferenceRepository
from ojt_tracker.core.storage import StorageManager


def get_config(request: Request) -> ConfigManager:
    """Get the configuration manager stored in app state."""
    config: ConfigManager = request.app.state.config
    return config


def get_storage(request: Request) -> StorageManager:
    """Get the storage manager stored in app state."""
    storage: StorageManager = request.app.state.storage
    return storage


def get_entry_repository(request: Request) -> EntryRepository:
    """Get an entry repository bound to the app's storage.

    Note:
        Use with Depends(get_entry_repository) in endpoint parameters.
    """
    return EntryRepository(get_storage(request))


def get_preference_repository(request: Request) -> PreferenceRepository:
    """Get a preference repository bound to the app's storage."""
    config = get_config(request)
    return PreferenceRepository(
        get_storage(request),
        default_required_hours=config.get("tracking.default_required_hours", 500),
    )
