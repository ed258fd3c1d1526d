"""Core data models for OJT time tracking."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ojt_tracker.core.codec import SHIFTS, TIME_FIELDS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_optional(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Entry:
    """One owner's logged shift times for a single date.

    Attributes:
        id: Storage-assigned identifier (immutable)
        date: Calendar date at midnight UTC
        created_by: Opaque identifier of the owning principal
        morning_time_in: Start of the morning shift (optional)
        morning_time_out: End of the morning shift (optional)
        afternoon_time_in: Start of the afternoon shift (optional)
        afternoon_time_out: End of the afternoon shift (optional)
        evening_time_in: Start of the evening shift (optional)
        evening_time_out: End of the evening shift (optional)
        created_at: When this record was created (immutable)
    """

    id: int
    date: datetime
    created_by: str
    morning_time_in: Optional[datetime] = None
    morning_time_out: Optional[datetime] = None
    afternoon_time_in: Optional[datetime] = None
    afternoon_time_out: Optional[datetime] = None
    evening_time_in: Optional[datetime] = None
    evening_time_out: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def shifts(self) -> list[tuple[Optional[datetime], Optional[datetime]]]:
        """Time-in/time-out pairs in morning, afternoon, evening order."""
        return [(getattr(self, start), getattr(self, end)) for start, end in SHIFTS]

    def apply(self, data: dict[str, Any]) -> None:
        """Replace all mutable fields (date and the six times) from ``data``."""
        self.date = data["date"]
        for name in TIME_FIELDS:
            setattr(self, name, data.get(name))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for CSV serialization."""
        row: dict[str, Any] = {
            "id": self.id,
            "date": self.date.isoformat(),
            "created_by": self.created_by,
        }
        for name in TIME_FIELDS:
            value = getattr(self, name)
            row[name] = value.isoformat() if value else ""
        row["created_at"] = self.created_at.isoformat()
        return row

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create Entry from a CSV row."""
        return cls(
            id=int(data["id"]),
            date=datetime.fromisoformat(data["date"]),
            created_by=data["created_by"],
            created_at=datetime.fromisoformat(data["created_at"]),
            **{name: _parse_optional(data.get(name)) for name in TIME_FIELDS},
        )


ENTRY_FIELDNAMES = ["id", "date", "created_by", *TIME_FIELDS, "created_at"]


@dataclass
class Preference:
    """Per-owner settings that live outside any entry record.

    Attributes:
        owner_id: Opaque identifier of the owning principal
        required_hours: Target number of hours to complete
        updated_at: Last update time
    """

    owner_id: str
    required_hours: float
    updated_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for CSV serialization."""
        return {
            "owner_id": self.owner_id,
            "required_hours": self.required_hours,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Preference":
        """Create Preference from a CSV row."""
        return cls(
            owner_id=data["owner_id"],
            required_hours=float(data["required_hours"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


PREFERENCE_FIELDNAMES = ["owner_id", "required_hours", "updated_at"]
