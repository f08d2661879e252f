"""
NoteDesk Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the three failure classes of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` with the matching HTTP status code.
Who:   Raised by the validator and NoteStore; caught by global handlers.

Exception Hierarchy:
    NoteDeskError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error

No exception in this hierarchy is retried; each one ends its request.
"""

from typing import Any, Dict, Optional


class NoteDeskError(Exception):
    """
    Base exception for all NoteDesk application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, not returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteDeskError):
    """
    Raised when a write payload fails validation.

    When:    Title or description missing/empty, category outside the fixed set,
             or a request FastAPI could not parse.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Title and description are required"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoteDeskError):
    """
    Raised when the referenced note does not exist.

    When:    UPDATE/DELETE affected zero rows, or a lookup by id found nothing.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class StoreError(NoteDeskError):
    """
    Raised when the persistence layer fails.

    What:    Wraps any SQLAlchemy/driver failure (I/O fault, locked database,
             constraint violation).
    HTTP:    500 Internal Server Error

    The message is the storage engine's own text, passed to the client
    verbatim (e.g. "database is locked").
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
