"""Tests for elapsed-hours arithmetic and progress aggregation."""

import pytest  # type: ignore[import-not-found]

from ojt_tracker.core.codec import decode_date, decode_time
from ojt_tracker.core.models import Entry
from ojt_tracker.core.timeutil import (
    calculate_entry_hours,
    completion_percentage,
    entry_total_hours,
    summarize,
)


def make_entry(entry_id: int = 1, **times: str) -> Entry:
    """Build a stored entry from wire-format times."""
    return Entry(
        id=entry_id,
        date=decode_date("2025-02-05"),
        created_by="owner-a",
        **{name: decode_time(value) for name, value in times.items()},
    )


class TestCalculateEntryHours:
    """Test calculate_entry_hours."""

    def test_full_day(self) -> None:
        """Test a regular shift."""
        assert calculate_entry_hours("09:00", "17:00") == 8.0

    def test_partial_hours(self) -> None:
        """Test minutes contribute fractional hours."""
        assert calculate_entry_hours("08:00", "12:30") == 4.5

    def test_never_negative(self) -> None:
        """Test that time-out before time-in yields 0."""
        assert calculate_entry_hours("09:00", "08:00") == 0

    @pytest.mark.parametrize("time_in,time_out", [("", "17:00"), ("09:00", ""), (None, None)])
    def test_missing_side_is_zero(self, time_in, time_out) -> None:  # type: ignore[no-untyped-def]
        """Test that a missing time gives 0."""
        assert calculate_entry_hours(time_in, time_out) == 0

    @pytest.mark.parametrize(
        "bad", ["9", "ab:cd", ":", "nine:thirty", "09:00:zz", "-1:00", "09:-30", " 9:00"]
    )
    def test_malformed_is_zero(self, bad: str) -> None:
        """Test that malformed input gives 0 instead of raising."""
        assert calculate_entry_hours(bad, "17:00") == 0
        assert calculate_entry_hours("08:00", bad) == 0

    def test_seconds_are_ignored(self) -> None:
        """Test HH:MM:SS input."""
        assert calculate_entry_hours("08:00:59", "09:00:00") == 1.0


class TestEntryTotalHours:
    """Test entry_total_hours."""

    def test_sums_all_shifts(self) -> None:
        """Test that morning, afternoon and evening add up."""
        entry = make_entry(
            morning_time_in="08:00",
            morning_time_out="12:00",
            afternoon_time_in="13:00",
            afternoon_time_out="17:00",
            evening_time_in="18:00",
            evening_time_out="19:30",
        )
        assert entry_total_hours(entry) == 9.5

    def test_unpaired_shift_counts_zero(self) -> None:
        """Test that a shift missing its time-out adds nothing."""
        entry = make_entry(morning_time_in="08:00", morning_time_out="12:00", afternoon_time_in="13:00")
        assert entry_total_hours(entry) == 4.0


class TestCompletionPercentage:
    """Test completion_percentage."""

    def test_zero_required(self) -> None:
        """Test that a zero target never divides by zero."""
        assert completion_percentage(10, 0) == 0

    def test_rounds(self) -> None:
        """Test rounding to a whole percentage."""
        assert completion_percentage(123.4, 500) == 25

    @pytest.mark.parametrize("completed,required,expected", [(1, 8, 13), (3, 8, 38), (5, 8, 63)])
    def test_halves_round_up(self, completed: float, required: float, expected: int) -> None:
        """Test that an exact half always rounds up."""
        assert completion_percentage(completed, required) == expected

    def test_capped_at_100(self) -> None:
        """Test that overshooting the target stays at 100."""
        assert completion_percentage(600, 500) == 100


class TestSummarize:
    """Test summarize."""

    def test_summary(self) -> None:
        """Test aggregate progress over several entries."""
        entries = [
            make_entry(1, morning_time_in="08:00", morning_time_out="12:00"),
            make_entry(2, afternoon_time_in="13:00", afternoon_time_out="18:00"),
        ]
        summary = summarize(entries, 18)

        assert summary.completed_hours == 9.0
        assert summary.required_hours == 18
        assert summary.remaining_hours == 9.0
        assert summary.completion_percentage == 50
        assert summary.entry_count == 2

    def test_remaining_never_negative(self) -> None:
        """Test that remaining hours floor at zero."""
        entries = [make_entry(1, morning_time_in="08:00", morning_time_out="12:00")]
        summary = summarize(entries, 2)
        assert summary.remaining_hours == 0
        assert summary.completion_percentage == 100

    def test_empty(self) -> None:
        """Test a summary with no entries."""
        summary = summarize([], 500)
        assert summary.completed_hours == 0
        assert summary.completion_percentage == 0
        assert summary.entry_count == 0
