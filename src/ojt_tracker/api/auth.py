"""Identity provider for the API.

Principals are carried by JWTs signed with the secret key from configuration.
The token may arrive as an ``Authorization: Bearer`` header or as the session
cookie; handlers only ever see the resolved :class:`Principal`.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, Request, Response  # type: ignore[import-untyped]
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer  # type: ignore[import-untyped]
from jose import JWTError, jwt  # type: ignore[import-untyped]

from ojt_tracker.api.dependencies import get_config
from ojt_tracker.core.config import ConfigManager
from ojt_tracker.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Missing or non-bearer headers fall through to the session cookie
security = HTTPBearer(auto_error=False)


@dataclass
class Principal:
    """Authenticated identity; ``id`` is the opaque owner of entries."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None


def create_access_token(
    data: dict[str, Any], secret_key: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token.

    Args:
        data: Claims to encode in the token
        secret_key: Secret key for encoding
        expires_delta: Optional expiration time delta (default 24 hours)

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token(
        ...     data={"sub": "user-123"},
        ...     secret_key="your-secret-key",
        ...     expires_delta=timedelta(hours=24)
        ... )
    """
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({"exp": now + (expires_delta or timedelta(hours=24)), "iat": now})

    encoded_jwt: str = jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, secret_key: str) -> Principal:
    """Verify a token and build the principal it identifies.

    Raises:
        AuthenticationError: If the token is invalid, expired or has no subject
    """
    try:
        payload: dict[str, Any] = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise AuthenticationError() from e

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        logger.info("Rejected access token without subject")
        raise AuthenticationError()

    return Principal(id=subject, email=payload.get("email"), name=payload.get("name"))


def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    config: ConfigManager = Depends(get_config),
) -> Principal:
    """Resolve the authenticated principal of a request.

    Args:
        request: FastAPI request (injected)
        credentials: Bearer credentials, if any (injected)
        config: Configuration manager (injected)

    Returns:
        Authenticated principal

    Raises:
        AuthenticationError: If no valid principal can be resolved

    Note:
        Use with Depends(get_current_principal) to protect endpoints.
    """
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(config.get("api.authentication.cookie_name", "ojt_session"))
    if not token:
        raise AuthenticationError()

    secret_key = config.get("api.authentication.secret_key")
    if not secret_key:
        logger.error("API secret key not configured; rejecting all requests")
        raise AuthenticationError()

    return decode_access_token(token, secret_key)


def sign_out(response: Response, config: ConfigManager) -> None:
    """End the browser session by clearing the session cookie."""
    response.delete_cookie(config.get("api.authentication.cookie_name", "ojt_session"))


def get_token_expiry_seconds(config: ConfigManager) -> int:
    """Token expiry time in seconds from config."""
    hours: int = config.get("api.authentication.token_expiry_hours", 24)
    return hours * 3600


def create_token_for_user(
    config: ConfigManager,
    user_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> dict[str, Any]:
    """Create a complete token response.

    Args:
        config: Configuration manager
        user_id: Principal identifier (becomes the entry owner)
        email: Optional email claim
        expires_delta: Optional expiry (default from config)

    Returns:
        Dictionary with access_token, token_type, and expires_in

    Example:
        >>> config = ConfigManager()
        >>> token_data = create_token_for_user(config, "user-123")
        >>> print(token_data["access_token"])
    """
    secret_key = config.ensure_api_secret_key()

    if expires_delta is None:
        expires_delta = timedelta(seconds=get_token_expiry_seconds(config))

    claims: dict[str, Any] = {"sub": user_id}
    if email:
        claims["email"] = email

    return {
        "access_token": create_access_token(claims, secret_key, expires_delta),
        "token_type": "bearer",
        "expires_in": int(expires_delta.total_seconds()),
    }
