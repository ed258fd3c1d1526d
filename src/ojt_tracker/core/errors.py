"""Error taxonomy shared by the core and the API layer.

Each error maps to exactly one HTTP status in ``ojt_tracker.api.middleware``.
Messages carried by these errors are safe to show to callers; internal detail
is logged where the error is raised, never attached here.
"""

from typing import Any, Optional


class TrackerError(Exception):
    """Base class for all OJT Tracker errors."""

    message = "OJT Tracker error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthenticationError(TrackerError):
    """No valid principal could be resolved for the request."""

    message = "Unauthorized access"


class ValidationError(TrackerError):
    """A payload failed schema constraints.

    Attributes:
        field_errors: Mapping of field name to list of messages
        form_errors: Messages not attached to a single field
    """

    message = "Invalid request payload"

    def __init__(
        self,
        field_errors: Optional[dict[str, list[str]]] = None,
        form_errors: Optional[list[str]] = None,
    ):
        super().__init__()
        self.field_errors = field_errors or {}
        self.form_errors = form_errors or []

    def to_dict(self) -> dict[str, Any]:
        """Per-field breakdown for the response body."""
        return {"form_errors": list(self.form_errors), "field_errors": dict(self.field_errors)}


class NotFoundError(TrackerError):
    """Referenced entry is not visible to the authenticated owner.

    Raised both when the entry does not exist and when it belongs to another
    owner; the two cases are indistinguishable to callers.
    """

    message = "The requested resource could not be found"


class ResourceIdentifierError(NotFoundError):
    """The resource identifier in the path is missing or malformed."""


class StorageError(TrackerError):
    """Unclassified failure from the persistence layer."""

    message = "Internal Server Error"


class FormatError(ValueError):
    """A wire string could not be decoded into a storage value."""
