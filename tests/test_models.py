"""Tests for data models."""

from datetime import datetime, timezone

from ojt_tracker.core.models import ENTRY_FIELDNAMES, Entry, Preference


class TestEntry:
    """Test Entry model."""

    def test_defaults(self) -> None:
        """Test that unset times default to None."""
        entry = Entry(id=1, date=datetime(2025, 2, 5, tzinfo=timezone.utc), created_by="owner-a")

        assert entry.morning_time_in is None
        assert entry.evening_time_out is None
        assert entry.created_at.tzinfo is not None

    def test_shifts_order(self) -> None:
        """Test that shifts come back as morning, afternoon, evening."""
        t = datetime(1970, 1, 1, 8, 0, tzinfo=timezone.utc)
        entry = Entry(
            id=1,
            date=datetime(2025, 2, 5, tzinfo=timezone.utc),
            created_by="owner-a",
            afternoon_time_in=t,
        )

        assert entry.shifts == [(None, None), (t, None), (None, None)]

    def test_apply_replaces_unspecified_times(self) -> None:
        """Test that times missing from the update data are cleared."""
        t = datetime(1970, 1, 1, 8, 0, tzinfo=timezone.utc)
        entry = Entry(
            id=1,
            date=datetime(2025, 2, 5, tzinfo=timezone.utc),
            created_by="owner-a",
            morning_time_in=t,
        )

        entry.apply({"date": datetime(2025, 2, 6, tzinfo=timezone.utc), "evening_time_in": t})

        assert entry.date.day == 6
        assert entry.morning_time_in is None
        assert entry.evening_time_in == t
        assert entry.id == 1

    def test_to_dict(self) -> None:
        """Test conversion to a CSV row."""
        entry = Entry(
            id=7,
            date=datetime(2025, 2, 5, tzinfo=timezone.utc),
            created_by="owner-a",
            morning_time_in=datetime(1970, 1, 1, 8, 0, tzinfo=timezone.utc),
        )
        row = entry.to_dict()

        assert list(row) == ENTRY_FIELDNAMES
        assert row["id"] == 7
        assert row["date"] == "2025-02-05T00:00:00+00:00"
        assert row["morning_time_in"] == "1970-01-01T08:00:00+00:00"
        assert row["morning_time_out"] == ""

    def test_from_dict(self) -> None:
        """Test creation from a CSV row with string values."""
        entry = Entry.from_dict(
            {
                "id": "3",
                "date": "2025-02-05T00:00:00+00:00",
                "created_by": "owner-a",
                "morning_time_in": "1970-01-01T08:00:00+00:00",
                "morning_time_out": "",
                "created_at": "2025-02-05T09:30:00+00:00",
            }
        )

        assert entry.id == 3
        assert entry.morning_time_in == datetime(1970, 1, 1, 8, 0, tzinfo=timezone.utc)
        assert entry.morning_time_out is None
        assert entry.afternoon_time_in is None


class TestPreference:
    """Test Preference model."""

    def test_round_trip(self) -> None:
        """Test CSV serialization."""
        preference = Preference(owner_id="owner-a", required_hours=486.5)
        row = {k: str(v) for k, v in preference.to_dict().items()}

        loaded = Preference.from_dict(row)
        assert loaded.required_hours == 486.5
        assert loaded.updated_at == preference.updated_at
