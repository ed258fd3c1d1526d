"""Middleware for the FastAPI application.

This module provides CORS, request logging, and the mapping from the
error taxonomy in ``ojt_tracker.core.errors`` to HTTP responses. It also
holds the request helpers shared by the routers.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator

from fastapi import FastAPI, Request, status  # type: ignore[import-untyped]
from fastapi.middleware.cors import CORSMiddleware  # type: ignore[import-untyped]
from fastapi.responses import JSONResponse, Response  # type: ignore[import-untyped]

from ojt_tracker.core.config import ConfigManager
from ojt_tracker.core.errors import (
    AuthenticationError,
    NotFoundError,
    ResourceIdentifierError,
    StorageError,
    TrackerError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@contextmanager
def unexpected_errors(operation: str) -> Iterator[None]:
    """Turn anything outside the error taxonomy into a logged StorageError.

    Args:
        operation: Short name of the handler step, used in the log line.
    """
    try:
        yield
    except TrackerError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected failure during {operation}")
        raise StorageError() from e


async def read_json(request: Request) -> Any:
    """Parse the request body, treating malformed JSON as a form error."""
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError(form_errors=["Request body must be valid JSON"]) from e


def setup_cors(app: FastAPI, config: ConfigManager) -> None:
    """Configure CORS middleware from the api.cors section of config."""
    if not config.get("api.cors.enabled", True):
        return

    origins = config.get("api.cors.origins", ["http://localhost:3000"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def setup_request_logging(app: FastAPI) -> None:
    """Log method, path, status and duration of every request."""

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response


def _error(status_code: int, body: dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def setup_exception_handlers(app: FastAPI, config: ConfigManager) -> None:
    """Map core errors to status codes and generic JSON bodies.

    Note:
        A referenced entry that is not visible to the caller answers 404.
        With api.compat.legacy_not_found_status enabled it answers 400, as
        earlier clients expect; a missing or malformed path identifier
        always answers 404.
    """
    legacy_not_found = bool(config.get("api.compat.legacy_not_found_status", False))

    async def handle_authentication(request: Request, exc: AuthenticationError) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, {"error": exc.message})

    async def handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, {"errors": exc.to_dict()})

    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        status_code = status.HTTP_404_NOT_FOUND
        if legacy_not_found and not isinstance(exc, ResourceIdentifierError):
            status_code = status.HTTP_400_BAD_REQUEST
        return _error(status_code, {"error": exc.message})

    async def handle_storage(request: Request, exc: StorageError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": exc.message})

    app.add_exception_handler(AuthenticationError, handle_authentication)
    app.add_exception_handler(ValidationError, handle_validation)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StorageError, handle_storage)


def setup_middleware(app: FastAPI, config: ConfigManager) -> None:
    """Set up all middleware and error handlers for the application."""
    setup_cors(app, config)
    setup_request_logging(app)
    setup_exception_handlers(app, config)
