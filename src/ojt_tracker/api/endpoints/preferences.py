"""Preference endpoints for the caller's required-hours target."""

import logging

from fastapi import APIRouter, Depends, Request  # type: ignore[import-untyped]

from ojt_tracker.api.auth import Principal, get_current_principal
from ojt_tracker.api.dependencies import get_preference_repository
from ojt_tracker.api.middleware import read_json, unexpected_errors
from ojt_tracker.api.models import PreferenceResponse
from ojt_tracker.core.repository import PreferenceRepository
from ojt_tracker.core.schema import validate_preference_payload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=PreferenceResponse)
async def get_preferences(
    principal: Principal = Depends(get_current_principal),
    preferences: PreferenceRepository = Depends(get_preference_repository),
) -> PreferenceResponse:
    """Get the caller's preferences (defaults until first saved).

    Example:
        >>> GET /api/preferences
        {"required_hours": 500.0}
    """
    with unexpected_errors("preferences get"):
        return PreferenceResponse.from_preference(preferences.get(principal.id))


@router.put("", response_model=PreferenceResponse)
async def update_preferences(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    preferences: PreferenceRepository = Depends(get_preference_repository),
) -> PreferenceResponse:
    """Set the caller's required-hours target.

    Example:
        >>> PUT /api/preferences
        {"required_hours": 486}
    """
    payload = validate_preference_payload(await read_json(request))

    with unexpected_errors("preferences update"):
        preference = preferences.set_required_hours(principal.id, payload.required_hours)

    logger.info(f"Required hours for {principal.id} set to {payload.required_hours}")
    return PreferenceResponse.from_preference(preference)
