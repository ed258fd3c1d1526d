"""Tests for ownership-scoped repositories."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from ojt_tracker.core.codec import decode_date, decode_time
from ojt_tracker.core.errors import NotFoundError
from ojt_tracker.core.repository import EntryRepository, PreferenceRepository
from ojt_tracker.core.storage import StorageManager


@pytest.fixture  # type: ignore[misc]
def temp_storage() -> StorageManager:
    """Create a storage manager with temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield StorageManager(Path(tmpdir) / "data")


@pytest.fixture  # type: ignore[misc]
def entries(temp_storage: StorageManager) -> EntryRepository:
    """Create an entry repository."""
    return EntryRepository(temp_storage)


@pytest.fixture  # type: ignore[misc]
def preferences(temp_storage: StorageManager) -> PreferenceRepository:
    """Create a preference repository."""
    return PreferenceRepository(temp_storage, default_required_hours=500)


def entry_data(date: str, owner: str = "owner-a", **times: str) -> dict:
    """Build storage values for an entry."""
    data = {"date": decode_date(date), "created_by": owner}
    data.update({name: decode_time(value) for name, value in times.items()})
    return data


class TestEntryRepository:
    """Test EntryRepository."""

    def test_create_assigns_ids(self, entries: EntryRepository) -> None:
        """Test that created entries get increasing ids."""
        first = entries.create(entry_data("2025-01-01"))
        second = entries.create(entry_data("2025-01-02"))

        assert first.id == 1
        assert second.id == 2
        assert first.created_at.tzinfo is not None

    def test_create_persists_times(self, entries: EntryRepository) -> None:
        """Test that times survive a storage round trip."""
        created = entries.create(
            entry_data("2025-02-05", morning_time_in="08:00", morning_time_out="12:00")
        )

        loaded = entries.get_by_id_and_owner(created.id, "owner-a")
        assert loaded is not None
        assert loaded.date == datetime(2025, 2, 5, tzinfo=timezone.utc)
        assert loaded.morning_time_in == datetime(1970, 1, 1, 8, 0, tzinfo=timezone.utc)
        assert loaded.morning_time_out == datetime(1970, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert loaded.afternoon_time_in is None

    def test_list_by_owner_most_recent_first(self, entries: EntryRepository) -> None:
        """Test ordering by date, descending."""
        entries.create(entry_data("2025-01-01"))
        entries.create(entry_data("2025-03-01"))
        entries.create(entry_data("2025-02-01"))

        dates = [e.date.strftime("%Y-%m-%d") for e in entries.list_by_owner("owner-a")]
        assert dates == ["2025-03-01", "2025-02-01", "2025-01-01"]

    def test_same_date_ties_break_by_id(self, entries: EntryRepository) -> None:
        """Test that entries sharing a date list newest id first."""
        entries.create(entry_data("2025-01-01"))
        entries.create(entry_data("2025-01-01"))

        assert [e.id for e in entries.list_by_owner("owner-a")] == [2, 1]

    def test_list_by_owner_isolates_owners(self, entries: EntryRepository) -> None:
        """Test that owners never see each other's entries."""
        entries.create(entry_data("2025-01-01", owner="owner-a"))
        entries.create(entry_data("2025-01-02", owner="owner-b"))

        assert [e.created_by for e in entries.list_by_owner("owner-a")] == ["owner-a"]
        assert entries.list_by_owner("owner-c") == []

    def test_get_by_id_and_owner_hides_foreign_entries(self, entries: EntryRepository) -> None:
        """Test that another owner's id looks like a missing id."""
        created = entries.create(entry_data("2025-01-01", owner="owner-a"))

        assert entries.get_by_id_and_owner(created.id, "owner-b") is None
        assert entries.get_by_id_and_owner(999, "owner-a") is None

    def test_update_replaces_all_fields(self, entries: EntryRepository) -> None:
        """Test that an update replaces date and every time."""
        created = entries.create(
            entry_data("2025-01-01", morning_time_in="08:00", morning_time_out="12:00")
        )

        entries.update_by_id_and_owner(
            created.id,
            "owner-a",
            entry_data("2025-01-02", evening_time_in="18:00", evening_time_out="20:00"),
        )

        loaded = entries.get_by_id_and_owner(created.id, "owner-a")
        assert loaded is not None
        assert loaded.date == datetime(2025, 1, 2, tzinfo=timezone.utc)
        assert loaded.morning_time_in is None
        assert loaded.evening_time_out == datetime(1970, 1, 1, 20, 0, tzinfo=timezone.utc)
        assert loaded.created_at == created.created_at
        assert loaded.created_by == "owner-a"

    def test_update_foreign_entry(self, entries: EntryRepository) -> None:
        """Test that updating another owner's entry is NotFound and changes nothing."""
        created = entries.create(entry_data("2025-01-01", owner="owner-a"))

        with pytest.raises(NotFoundError):
            entries.update_by_id_and_owner(created.id, "owner-b", entry_data("2025-05-05", owner="owner-b"))

        loaded = entries.get_by_id_and_owner(created.id, "owner-a")
        assert loaded is not None
        assert loaded.date == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_delete(self, entries: EntryRepository) -> None:
        """Test deleting an entry."""
        created = entries.create(entry_data("2025-01-01"))

        deleted = entries.delete_by_id_and_owner(created.id, "owner-a")

        assert deleted.id == created.id
        assert entries.list_by_owner("owner-a") == []

    def test_delete_foreign_entry(self, entries: EntryRepository) -> None:
        """Test that deleting another owner's entry is NotFound and keeps it."""
        created = entries.create(entry_data("2025-01-01", owner="owner-a"))

        with pytest.raises(NotFoundError):
            entries.delete_by_id_and_owner(created.id, "owner-b")

        assert len(entries.list_by_owner("owner-a")) == 1

    def test_delete_twice(self, entries: EntryRepository) -> None:
        """Test that the second delete is NotFound."""
        created = entries.create(entry_data("2025-01-01"))
        entries.delete_by_id_and_owner(created.id, "owner-a")

        with pytest.raises(NotFoundError):
            entries.delete_by_id_and_owner(created.id, "owner-a")

    def test_ids_not_reused_after_delete(self, entries: EntryRepository) -> None:
        """Test that deleting the newest entry does not free its id."""
        entries.create(entry_data("2025-01-01"))
        second = entries.create(entry_data("2025-01-02"))
        entries.delete_by_id_and_owner(second.id, "owner-a")

        third = entries.create(entry_data("2025-01-03"))
        assert third.id == 3


class TestPreferenceRepository:
    """Test PreferenceRepository."""

    def test_default(self, preferences: PreferenceRepository) -> None:
        """Test that an owner without a stored preference gets the default."""
        preference = preferences.get("owner-a")
        assert preference.owner_id == "owner-a"
        assert preference.required_hours == 500

    def test_set_and_get(self, preferences: PreferenceRepository) -> None:
        """Test storing a target."""
        preferences.set_required_hours("owner-a", 486)

        assert preferences.get("owner-a").required_hours == 486
        assert preferences.get("owner-b").required_hours == 500

    def test_set_replaces(self, preferences: PreferenceRepository, temp_storage: StorageManager) -> None:
        """Test that setting twice keeps a single row per owner."""
        preferences.set_required_hours("owner-a", 486)
        preferences.set_required_hours("owner-a", 300)

        assert preferences.get("owner-a").required_hours == 300
        assert len(temp_storage.read_preference_rows()) == 1
