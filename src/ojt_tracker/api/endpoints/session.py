"""Session endpoints: who is signed in, and signing out."""

from fastapi import APIRouter, Depends, Response, status  # type: ignore[import-untyped]

from ojt_tracker.api.auth import Principal, get_current_principal, sign_out
from ojt_tracker.api.dependencies import get_config
from ojt_tracker.api.models import PrincipalResponse
from ojt_tracker.core.config import ConfigManager

router = APIRouter()


@router.get("", response_model=PrincipalResponse)
async def get_session(principal: Principal = Depends(get_current_principal)) -> PrincipalResponse:
    """Profile of the authenticated principal."""
    return PrincipalResponse(id=principal.id, email=principal.email, name=principal.name)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def signout(config: ConfigManager = Depends(get_config)) -> Response:
    """Clear the session cookie.

    Note:
        Bearer tokens held by non-browser clients stay valid until they
        expire; discarding them is up to the client.
    """
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    sign_out(response, config)
    return response
