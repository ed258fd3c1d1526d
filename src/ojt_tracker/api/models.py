"""Pydantic models for API responses.

Request bodies are validated by ``ojt_tracker.core.schema`` after the caller
is authenticated, so only response shapes live here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field  # type: ignore[import-untyped]

from ojt_tracker.core.codec import encode_date, encode_time
from ojt_tracker.core.models import Entry, Preference
from ojt_tracker.core.timeutil import ProgressSummary

# ============================================================================
# Entry Models
# ============================================================================


class EntryResponse(BaseModel):
    """Wire shape of an entry: date and times as strings, "" when unset."""

    id: int
    date: str
    morning_time_in: str = ""
    morning_time_out: str = ""
    afternoon_time_in: str = ""
    afternoon_time_out: str = ""
    evening_time_in: str = ""
    evening_time_out: str = ""

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryResponse":
        """Encode a stored entry for the wire."""
        return cls(
            id=entry.id,
            date=encode_date(entry.date),
            morning_time_in=encode_time(entry.morning_time_in),
            morning_time_out=encode_time(entry.morning_time_out),
            afternoon_time_in=encode_time(entry.afternoon_time_in),
            afternoon_time_out=encode_time(entry.afternoon_time_out),
            evening_time_in=encode_time(entry.evening_time_in),
            evening_time_out=encode_time(entry.evening_time_out),
        )


class SummaryResponse(BaseModel):
    """Progress of the caller against their required hours."""

    completed_hours: float
    required_hours: float
    remaining_hours: float
    completion_percentage: int = Field(..., ge=0, le=100)
    entry_count: int

    @classmethod
    def from_summary(cls, summary: ProgressSummary) -> "SummaryResponse":
        return cls(
            completed_hours=summary.completed_hours,
            required_hours=summary.required_hours,
            remaining_hours=summary.remaining_hours,
            completion_percentage=summary.completion_percentage,
            entry_count=summary.entry_count,
        )


class PreferenceResponse(BaseModel):
    """Caller's stored preferences."""

    required_hours: float

    @classmethod
    def from_preference(cls, preference: Preference) -> "PreferenceResponse":
        return cls(required_hours=preference.required_hours)


# ============================================================================
# Session Models
# ============================================================================


class PrincipalResponse(BaseModel):
    """Profile of the authenticated principal."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None


# ============================================================================
# System Models
# ============================================================================


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status (healthy, degraded, unhealthy)")
    timestamp: datetime = Field(..., description="Current server time")
    version: str = Field(..., description="API version")


class StatusResponse(BaseModel):
    """Response model for system status."""

    version: str
    cors_enabled: bool
    legacy_not_found_status: bool
    storage_ready: bool
    uptime_seconds: float


# ============================================================================
# Error Models
# ============================================================================


class ErrorResponse(BaseModel):
    """Body of 401, 404 and 500 responses."""

    error: str = Field(..., description="Error message")
