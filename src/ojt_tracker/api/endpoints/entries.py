"""Entry endpoints.

Every handler authenticates first, so an unauthenticated request answers 401
before its body is read or storage is touched. Each request then moves
through validation, persistence and response encoding, leaving early with
an error response at any step.
"""

import logging
from typing import Any, Union

from fastapi import APIRouter, Depends, Request, Response, status  # type: ignore[import-untyped]

from ojt_tracker.api.auth import Principal, get_current_principal
from ojt_tracker.api.dependencies import get_entry_repository, get_preference_repository
from ojt_tracker.api.middleware import read_json, unexpected_errors
from ojt_tracker.api.models import EntryResponse, ErrorResponse, SummaryResponse
from ojt_tracker.core.errors import NotFoundError, ResourceIdentifierError
from ojt_tracker.core.repository import EntryRepository, PreferenceRepository
from ojt_tracker.core.schema import validate_entry_payload
from ojt_tracker.core.timeutil import summarize

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS: dict[Union[int, str], dict[str, Any]] = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _parse_entry_id(entry_id: str) -> int:
    # Plain ASCII digits only: no sign, underscores, whitespace or other scripts
    if not (entry_id.isascii() and entry_id.isdigit()):
        raise ResourceIdentifierError()
    parsed = int(entry_id)
    if parsed <= 0:
        raise ResourceIdentifierError()
    return parsed


@router.get("", response_model=list[EntryResponse], responses=_ERRORS)
async def list_entries(
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
) -> list[EntryResponse]:
    """List the caller's entries, most recent date first.

    Example:
        >>> GET /api/entries
        [
            {
                "id": 3,
                "date": "2025-02-05",
                "morning_time_in": "08:00",
                "morning_time_out": "12:00",
                "afternoon_time_in": "",
                ...
            }
        ]
    """
    with unexpected_errors("list"):
        entries = repository.list_by_owner(principal.id)
        return [EntryResponse.from_entry(e) for e in entries]


@router.get("/summary", response_model=SummaryResponse, responses=_ERRORS)
async def get_summary(
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
    preferences: PreferenceRepository = Depends(get_preference_repository),
) -> SummaryResponse:
    """Completed hours and completion percentage against required hours."""
    with unexpected_errors("summary"):
        entries = repository.list_by_owner(principal.id)
        required = preferences.get(principal.id).required_hours
        return SummaryResponse.from_summary(summarize(entries, required))


@router.get(
    "/{entry_id}",
    response_model=EntryResponse,
    responses={**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_entry(
    entry_id: str,
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
) -> EntryResponse:
    """Get one of the caller's entries by id."""
    with unexpected_errors("get"):
        entry = repository.get_by_id_and_owner(_parse_entry_id(entry_id), principal.id)
        if entry is None:
            raise NotFoundError()
        return EntryResponse.from_entry(entry)


@router.post(
    "",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, status.HTTP_400_BAD_REQUEST: {"description": "Validation failed"}},
)
async def create_entry(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
) -> EntryResponse:
    """Create an entry owned by the caller.

    Example:
        >>> POST /api/entries
        {
            "date": "2025-02-05",
            "morning_time_in": "08:00",
            "morning_time_out": "12:00"
        }
    """
    payload = validate_entry_payload(await read_json(request), principal.id)

    with unexpected_errors("create"):
        entry = repository.create(payload.to_storage())
        logger.info(f"Entry {entry.id} created for {principal.id}")
        return EntryResponse.from_entry(entry)


@router.put("", status_code=status.HTTP_404_NOT_FOUND, include_in_schema=False)
@router.delete("", status_code=status.HTTP_404_NOT_FOUND, include_in_schema=False)
async def missing_entry_id(principal: Principal = Depends(get_current_principal)) -> None:
    """Reject updates and deletes that name no entry."""
    raise ResourceIdentifierError()


@router.put(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def update_entry(
    entry_id: str,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
) -> Response:
    """Replace the date and times of one of the caller's entries."""
    parsed_id = _parse_entry_id(entry_id)
    payload = validate_entry_payload(await read_json(request), principal.id)

    with unexpected_errors("update"):
        if repository.get_by_id_and_owner(parsed_id, principal.id) is None:
            raise NotFoundError()
        repository.update_by_id_and_owner(parsed_id, principal.id, payload.to_storage())

    logger.info(f"Entry {parsed_id} updated for {principal.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_ERRORS, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_entry(
    entry_id: str,
    principal: Principal = Depends(get_current_principal),
    repository: EntryRepository = Depends(get_entry_repository),
) -> Response:
    """Permanently delete one of the caller's entries."""
    parsed_id = _parse_entry_id(entry_id)

    with unexpected_errors("delete"):
        if repository.get_by_id_and_owner(parsed_id, principal.id) is None:
            raise NotFoundError()
        repository.delete_by_id_and_owner(parsed_id, principal.id)

    logger.info(f"Entry {parsed_id} deleted for {principal.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
