"""API endpoints.

Each module defines a FastAPI router that is included in the main application.

Available routers:
- system: Health checks and server status
- entries: Entry CRUD and progress summary
- preferences: Required-hours target
- session: Current principal and sign-out
"""

__all__ = ["system", "entries", "preferences", "session"]

from ojt_tracker.api.endpoints import entries, preferences, session, system  # noqa: F401
