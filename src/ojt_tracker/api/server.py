"""FastAPI application server.

This module contains the FastAPI application factory and the Uvicorn runner.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI  # type: ignore[import-untyped]
from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

from ojt_tracker import __version__
from ojt_tracker.api.middleware import setup_middleware
from ojt_tracker.core.config import CONFIG_ENV_VAR, ConfigManager
from ojt_tracker.core.log import setup_logging
from ojt_tracker.core.storage import StorageManager

logger = logging.getLogger(__name__)


def create_app(config: Optional[ConfigManager] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Optional configuration manager (creates default if None)

    Returns:
        Configured FastAPI application instance

    Example:
        >>> app = create_app()
        >>> # Or with custom config
        >>> app = create_app(ConfigManager(Path("config.yml")))
    """
    if config is None:
        config = ConfigManager()

    setup_logging(config.get("logging.level", "INFO"), config.get("logging.file"))

    app = FastAPI(
        title="OJT Tracker API",
        description="Record daily shift times and track progress toward required hours",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Shared by every request through the dependencies module
    app.state.config = config
    app.state.storage = StorageManager(config.data_dir)

    setup_middleware(app, config)

    from ojt_tracker.api.endpoints import entries, preferences, session, system

    app.include_router(system.router, prefix="/api", tags=["system"])
    app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
    app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
    app.include_router(session.router, prefix="/api/session", tags=["session"])

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Root endpoint - point at docs."""
        return JSONResponse(
            {
                "message": "OJT Tracker API",
                "version": __version__,
                "docs": "/docs",
                "health": "/api/health",
            }
        )

    logger.info(f"OJT Tracker API {__version__} ready (data in {config.data_dir})")
    return app


def run_server(
    host: str = "localhost",
    port: int = 8000,
    reload: bool = False,
    workers: int = 1,
    ssl_certfile: Optional[Path] = None,
    ssl_keyfile: Optional[Path] = None,
    config: Optional[ConfigManager] = None,
) -> None:
    """Run the API server using Uvicorn.

    Args:
        host: Host address to bind to
        port: Port number to bind to
        reload: Enable auto-reload for development
        workers: Number of worker processes
        ssl_certfile: Path to SSL certificate file
        ssl_keyfile: Path to SSL key file
        config: Optional configuration manager

    Note:
        This function blocks until the server is stopped. Worker processes
        build their own app from the same config file.
    """
    import uvicorn  # type: ignore[import-untyped]

    if config is None:
        config = ConfigManager()

    os.environ[CONFIG_ENV_VAR] = str(config.config_path)

    uvicorn_config = {
        "app": "ojt_tracker.api.server:create_app",
        "factory": True,
        "host": host,
        "port": port,
        "reload": reload,
        "workers": workers if not reload else 1,  # reload only works with 1 worker
        "log_level": config.get("api.advanced.log_level", "info"),
        "access_log": config.get("api.advanced.access_log", True),
    }

    if ssl_certfile and ssl_keyfile:
        uvicorn_config.update(
            {
                "ssl_certfile": str(ssl_certfile),
                "ssl_keyfile": str(ssl_keyfile),
            }
        )

    uvicorn.run(**uvicorn_config)
