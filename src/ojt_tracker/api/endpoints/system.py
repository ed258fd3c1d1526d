"""System endpoints for health checks and status."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends  # type: ignore[import-untyped]

from ojt_tracker import __version__
from ojt_tracker.api.dependencies import get_config, get_storage
from ojt_tracker.api.models import HealthResponse, StatusResponse
from ojt_tracker.core.config import ConfigManager
from ojt_tracker.core.storage import StorageManager

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Note:
        This endpoint is public (no authentication required).

    Example:
        >>> GET /api/health
        {
            "status": "healthy",
            "timestamp": "2025-11-16T10:30:00Z",
            "version": "0.1.0"
        }
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
    )


@router.get("/status", response_model=StatusResponse)
async def get_status(
    config: ConfigManager = Depends(get_config),
    storage: StorageManager = Depends(get_storage),
) -> StatusResponse:
    """Get server configuration and storage status."""
    return StatusResponse(
        version=__version__,
        cors_enabled=config.get("api.cors.enabled", True),
        legacy_not_found_status=config.get("api.compat.legacy_not_found_status", False),
        storage_ready=storage.entries_file.exists(),
        uptime_seconds=time.time() - _server_start_time,
    )
