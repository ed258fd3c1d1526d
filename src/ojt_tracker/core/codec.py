"""Conversion between wire strings and stored date/time values.

On the wire a date is ``YYYY-MM-DD`` and a time of day is zero-padded
``HH:MM``. In storage both are timezone-aware UTC datetimes: dates sit at
midnight, times of day are anchored to :data:`REFERENCE_DATE` so that only
the hour, minute and second are meaningful.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from ojt_tracker.core.errors import FormatError

REFERENCE_DATE = date(1970, 1, 1)

TIME_FIELDS = (
    "morning_time_in",
    "morning_time_out",
    "afternoon_time_in",
    "afternoon_time_out",
    "evening_time_in",
    "evening_time_out",
)

SHIFTS = (
    ("morning_time_in", "morning_time_out"),
    ("afternoon_time_in", "afternoon_time_out"),
    ("evening_time_in", "evening_time_out"),
)

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})(?::([0-9]{2}))?")


def normalize_optional(value: Any) -> Optional[str]:
    """Collapse the spellings of "unset" (absent, None, empty) into None.

    Args:
        value: Raw field value from a payload

    Returns:
        Stripped string, or None if the value is unset
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def decode_date(value: Any) -> datetime:
    """Parse a ``YYYY-MM-DD`` string into a datetime at midnight UTC.

    Args:
        value: Date string

    Returns:
        Timezone-aware datetime at 00:00 UTC

    Raises:
        FormatError: If the string is not a calendar date

    Example:
        >>> decode_date("2025-02-05")
        datetime.datetime(2025, 2, 5, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str):
        raise FormatError(f"Expected a date string, got {type(value).__name__}")

    match = _DATE_RE.fullmatch(value.strip())
    if not match:
        raise FormatError(f"Invalid date {value!r}, expected YYYY-MM-DD")

    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError as e:
        raise FormatError(f"Invalid date {value!r}: {e}") from e


def decode_time(value: Any) -> Optional[datetime]:
    """Parse an ``HH:MM`` or ``HH:MM:SS`` string into a time-of-day value.

    Args:
        value: Time string, or None/empty for an unset time

    Returns:
        UTC datetime on the reference date, or None if unset

    Raises:
        FormatError: If the string is not a valid time of day
    """
    value = normalize_optional(value)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FormatError(f"Expected a time string, got {type(value).__name__}")

    match = _TIME_RE.fullmatch(value)
    if not match:
        raise FormatError(f"Invalid time {value!r}, expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    try:
        return datetime(
            REFERENCE_DATE.year,
            REFERENCE_DATE.month,
            REFERENCE_DATE.day,
            hour,
            minute,
            second,
            tzinfo=timezone.utc,
        )
    except ValueError as e:
        raise FormatError(f"Invalid time {value!r}: {e}") from e


def encode_date(value: Optional[datetime]) -> str:
    """Format a stored date as ``YYYY-MM-DD`` ("" when absent)."""
    if value is None:
        return ""
    return _as_utc(value).strftime("%Y-%m-%d")


def encode_time(value: Optional[datetime]) -> str:
    """Format a stored time of day as ``HH:MM`` ("" when absent).

    Seconds are dropped; the wire format never exposes them.
    """
    if value is None:
        return ""
    value = _as_utc(value)
    return f"{value.hour:02d}:{value.minute:02d}"


def _as_utc(value: datetime) -> datetime:
    # Naive values are already UTC wall-clock.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
