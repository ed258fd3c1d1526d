"""Ownership-scoped persistence for entries and preferences.

Every read and write is filtered by owner. An id that exists under a
different owner behaves exactly like an id that does not exist at all.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ojt_tracker.core.errors import NotFoundError
from ojt_tracker.core.models import Entry, Preference
from ojt_tracker.core.storage import StorageManager

logger = logging.getLogger(__name__)


def _matches(row: dict[str, Any], entry_id: int, owner_id: str) -> bool:
    return row["id"] == str(entry_id) and row["created_by"] == owner_id


class EntryRepository:
    """Create, read, update and delete entries on behalf of an owner."""

    def __init__(self, storage: StorageManager):
        self.storage = storage

    def list_by_owner(self, owner_id: str) -> list[Entry]:
        """Load all entries of an owner, most recent date first.

        Args:
            owner_id: Owning principal

        Returns:
            List of entries (empty if the owner has none)
        """
        rows = [r for r in self.storage.read_entry_rows() if r["created_by"] == owner_id]
        entries = [Entry.from_dict(row) for row in rows]
        entries.sort(key=lambda e: (e.date, e.id), reverse=True)
        return entries

    def get_by_id_and_owner(self, entry_id: int, owner_id: str) -> Optional[Entry]:
        """Get an entry by id, scoped to its owner.

        Returns:
            Entry or None if no entry matches both id and owner
        """
        for row in self.storage.read_entry_rows():
            if _matches(row, entry_id, owner_id):
                return Entry.from_dict(row)
        return None

    def create(self, data: dict[str, Any]) -> Entry:
        """Persist a new entry.

        Args:
            data: Storage values including ``created_by``

        Returns:
            Stored entry with its generated id
        """
        with self.storage.transaction():
            rows = self.storage.read_entry_rows()
            entry = Entry(
                id=self.storage.next_entry_id(rows),
                date=data["date"],
                created_by=data["created_by"],
                created_at=datetime.now(timezone.utc),
            )
            entry.apply(data)
            rows.append(entry.to_dict())
            self.storage.write_entry_rows(rows)

        logger.debug(f"Created entry {entry.id} for {entry.created_by}")
        return entry

    def update_by_id_and_owner(self, entry_id: int, owner_id: str, data: dict[str, Any]) -> Entry:
        """Replace all mutable fields of an owner's entry.

        Raises:
            NotFoundError: If no entry matches both id and owner
        """
        with self.storage.transaction():
            rows = self.storage.read_entry_rows()
            for i, row in enumerate(rows):
                if _matches(row, entry_id, owner_id):
                    entry = Entry.from_dict(row)
                    entry.apply(data)
                    rows[i] = entry.to_dict()
                    break
            else:
                raise NotFoundError()
            self.storage.write_entry_rows(rows)

        logger.debug(f"Updated entry {entry_id} for {owner_id}")
        return entry

    def delete_by_id_and_owner(self, entry_id: int, owner_id: str) -> Entry:
        """Permanently delete an owner's entry.

        Raises:
            NotFoundError: If no entry matches both id and owner
        """
        with self.storage.transaction():
            rows = self.storage.read_entry_rows()
            kept = [r for r in rows if not _matches(r, entry_id, owner_id)]
            if len(kept) == len(rows):
                raise NotFoundError()
            deleted = next(r for r in rows if _matches(r, entry_id, owner_id))
            self.storage.write_entry_rows(kept)

        logger.debug(f"Deleted entry {entry_id} for {owner_id}")
        return Entry.from_dict(deleted)


class PreferenceRepository:
    """Per-owner preferences, defaulted until first set."""

    def __init__(self, storage: StorageManager, default_required_hours: float = 500):
        self.storage = storage
        self.default_required_hours = default_required_hours

    def get(self, owner_id: str) -> Preference:
        """Get an owner's preferences, falling back to defaults."""
        for row in self.storage.read_preference_rows():
            if row["owner_id"] == owner_id:
                return Preference.from_dict(row)
        return Preference(owner_id=owner_id, required_hours=self.default_required_hours)

    def set_required_hours(self, owner_id: str, hours: float) -> Preference:
        """Store an owner's required hours target."""
        preference = Preference(owner_id=owner_id, required_hours=hours)
        with self.storage.transaction():
            rows = [r for r in self.storage.read_preference_rows() if r["owner_id"] != owner_id]
            rows.append(preference.to_dict())
            self.storage.write_preference_rows(rows)
        return preference
