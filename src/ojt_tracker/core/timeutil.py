"""Elapsed-hours arithmetic and progress aggregation."""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from ojt_tracker.core.codec import encode_time
from ojt_tracker.core.models import Entry


@dataclass
class ProgressSummary:
    """Aggregate progress of an owner against their required hours."""

    completed_hours: float
    required_hours: float
    remaining_hours: float
    completion_percentage: int
    entry_count: int


def _minutes(value: str) -> Optional[int]:
    parts = value.split(":")
    if len(parts) < 2 or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    return int(parts[0]) * 60 + int(parts[1])


def calculate_entry_hours(time_in: Optional[str], time_out: Optional[str]) -> float:
    """Elapsed hours between two wall-clock strings.

    Accepts ``HH:MM`` or ``HH:MM:SS``; seconds are ignored. Missing or
    malformed input yields 0, and a time-out before the time-in never
    produces negative hours.

    Example:
        >>> calculate_entry_hours("09:00", "17:00")
        8.0
        >>> calculate_entry_hours("09:00", "08:00")
        0
    """
    if not time_in or not time_out:
        return 0

    start = _minutes(time_in)
    end = _minutes(time_out)
    if start is None or end is None:
        return 0

    return max(0, (end - start) / 60)


def entry_total_hours(entry: Entry) -> float:
    """Sum of the morning, afternoon and evening shifts of an entry."""
    return sum(
        calculate_entry_hours(encode_time(start), encode_time(end)) for start, end in entry.shifts
    )


def completion_percentage(completed: float, required: float) -> int:
    """Whole-number percentage of required hours completed, capped at 100."""
    if required <= 0:
        return 0
    # Halves round up, never to even
    return min(math.floor(completed / required * 100 + 0.5), 100)


def summarize(entries: Iterable[Entry], required_hours: float) -> ProgressSummary:
    """Aggregate completed hours across entries."""
    entries = list(entries)
    completed = round(sum(entry_total_hours(e) for e in entries), 2)
    return ProgressSummary(
        completed_hours=completed,
        required_hours=required_hours,
        remaining_hours=round(max(0.0, required_hours - completed), 2),
        completion_percentage=completion_percentage(completed, required_hours),
        entry_count=len(entries),
    )
