"""
NoteDesk Backend: Note Payload Validation
============================================

What:  Pure checks applied to a write payload before any database work.
Who:   Called by the POST and PUT route handlers.

Rules (same for create and update):
    1. title and description must be present and non-empty
    2. category, when given, must be one of Work / Personal / Others
"""

from typing import Optional

from notedesk.exceptions import ValidationError
from notedesk.models.note import DEFAULT_CATEGORY, NOTE_CATEGORIES
from notedesk.schemas.note import NoteWrite

MISSING_FIELDS_MESSAGE = "Title and description are required"
INVALID_CATEGORY_MESSAGE = "Invalid category"


def validate_note(payload: Optional[NoteWrite]) -> None:
    """
    Raise ValidationError if `payload` cannot be written.

    Args:
        payload: Parsed request body, or None when the request had no body

    Raises:
        ValidationError: "Title and description are required" or
                         "Invalid category"
    """
    if payload is None or not payload.title or not payload.description:
        missing = "title" if payload is None or not payload.title else "description"
        raise ValidationError(message=MISSING_FIELDS_MESSAGE, field=missing)

    if payload.category and payload.category not in NOTE_CATEGORIES:
        raise ValidationError(
            message=INVALID_CATEGORY_MESSAGE,
            field="category",
            context={"allowed": list(NOTE_CATEGORIES)},
        )


def resolve_category(category: Optional[str]) -> str:
    """Return `category`, or the default when it was omitted or empty."""
    return category or DEFAULT_CATEGORY
