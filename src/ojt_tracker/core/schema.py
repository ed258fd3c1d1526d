"""Validation schema for incoming payloads.

All models use Pydantic for validation. Unset optional times may arrive as
absent keys, ``null`` or ``""``; validators normalize all three to ``None`` so
nothing downstream has to tell them apart.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ojt_tracker.core.codec import TIME_FIELDS, decode_date, decode_time, normalize_optional
from ojt_tracker.core.errors import ValidationError


class EntryPayload(BaseModel):
    """Shape of an entry create/update payload."""

    model_config = ConfigDict(extra="ignore")

    date: str
    morning_time_in: Optional[str] = None
    morning_time_out: Optional[str] = None
    afternoon_time_in: Optional[str] = None
    afternoon_time_out: Optional[str] = None
    evening_time_in: Optional[str] = None
    evening_time_out: Optional[str] = None
    created_by: str = Field(..., min_length=1)

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        value = value.strip()
        decode_date(value)
        return value

    @field_validator(*TIME_FIELDS, mode="before")
    @classmethod
    def check_time(cls, value: Any) -> Optional[str]:
        value = normalize_optional(value)
        if value is not None:
            decode_time(value)
        return value

    def to_storage(self) -> dict[str, Any]:
        """Decode wire strings into storage values."""
        data: dict[str, Any] = {
            "date": decode_date(self.date),
            "created_by": self.created_by,
        }
        for name in TIME_FIELDS:
            data[name] = decode_time(getattr(self, name))
        return data


class PreferencePayload(BaseModel):
    """Shape of a preference update payload."""

    model_config = ConfigDict(extra="ignore")

    required_hours: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator("required_hours", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Required hours must be a number")
        return value


def _flatten(error: PydanticValidationError) -> ValidationError:
    field_errors: dict[str, list[str]] = {}
    form_errors: list[str] = []
    for item in error.errors():
        loc = item.get("loc") or ()
        if loc:
            field_errors.setdefault(str(loc[0]), []).append(item["msg"])
        else:
            form_errors.append(item["msg"])
    return ValidationError(field_errors=field_errors, form_errors=form_errors)


def validate_entry_payload(body: Any, owner_id: str) -> EntryPayload:
    """Validate an entry payload on behalf of an authenticated owner.

    Args:
        body: Decoded JSON request body
        owner_id: Identifier of the authenticated principal; any
            ``created_by`` in the body is replaced by this value

    Returns:
        Normalized payload

    Raises:
        ValidationError: If the payload fails schema constraints
    """
    if not isinstance(body, dict):
        raise ValidationError(form_errors=["Request body must be a JSON object"])

    try:
        return EntryPayload.model_validate({**body, "created_by": owner_id})
    except PydanticValidationError as e:
        raise _flatten(e) from e


def validate_preference_payload(body: Any) -> PreferencePayload:
    """Validate a preference payload.

    Raises:
        ValidationError: If the payload fails schema constraints
    """
    if not isinstance(body, dict):
        raise ValidationError(form_errors=["Request body must be a JSON object"])

    try:
        return PreferencePayload.model_validate(body)
    except PydanticValidationError as e:
        raise _flatten(e) from e
