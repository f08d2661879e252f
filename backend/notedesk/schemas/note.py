"""
NoteDesk Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the notes API.
How:   FastAPI parses request bodies into these models, serializes responses
       through them and generates the OpenAPI document from them.

Design Decision:
    Request fields are all Optional. FastAPI only checks JSON types here;
    presence and category membership are checked by
    `notedesk.services.validation.validate_note`, which produces the
    400 `{"error": ...}` responses the API contract requires instead of
    FastAPI's default 422 detail list.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    `completed` is ignored on create (new notes always start incomplete).
    On update, an omitted category means "Others" and an omitted completed
    means false, since update replaces every mutable field.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    description: Optional[str] = Field(
        default=None, description="Note body (required, non-empty)"
    )
    category: Optional[str] = Field(
        default=None, description="One of Work, Personal, Others (default Others)"
    )
    completed: Optional[bool] = Field(default=None, description="Completion flag (update only)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a stored note (one table row)."""
    id: int = Field(description="System-assigned note identifier")
    title: str
    description: str
    category: str = Field(description="Work, Personal or Others")
    completed: bool
    created_at: datetime = Field(description="Creation timestamp (UTC, ISO 8601)")
    updated_at: datetime = Field(description="Last update timestamp (UTC, ISO 8601)")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes."""
    id: int = Field(description="Identifier assigned to the new note")
    message: str = Field(default="Note created successfully")


class MessageResponse(BaseModel):
    """Returned by PUT and DELETE on /api/notes/{id}."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
