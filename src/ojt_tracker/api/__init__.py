"""REST API for OJT Tracker.

This module provides a FastAPI-based REST API for recording daily shift
times and reading progress toward the required hours.

Key features:
- Owner-scoped CRUD for entries
- Progress summary and required-hours preference
- JWT-based authentication (bearer header or session cookie)
- CORS support
- OpenAPI documentation

Usage:
    # Generate token
    ojt-tracker api token create --user-id alice

    # Start server
    ojt-tracker api serve

    # Access API docs
    http://localhost:8000/docs
"""

__all__ = ["create_app", "run_server"]

from ojt_tracker.api.server import create_app, run_server  # noqa: F401
