"""Core functionality for OJT time tracking."""

from ojt_tracker.core.models import Entry, Preference
from ojt_tracker.core.repository import EntryRepository, PreferenceRepository

__all__ = ["Entry", "Preference", "EntryRepository", "PreferenceRepository"]
