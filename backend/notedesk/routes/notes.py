"""
NoteDesk Backend: Notes Route Handlers
=========================================

What:  CRUD endpoints for notes under /api/notes.
How:   Parse query/body parameters, run the validator on writes, delegate to
       NoteStore, return JSON. Errors raised by the validator or store are
       rendered by the global exception handlers in main.py.

Endpoints:
    POST   /api/notes        create          200 {id, message}
    GET    /api/notes        list / search   200 [Note, ...]
    GET    /api/notes/{id}   detail          200 Note
    PUT    /api/notes/{id}   full replace    200 {message}
    DELETE /api/notes/{id}   delete          200 {message}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from notedesk.dependencies import get_note_store
from notedesk.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreatedResponse,
    NoteResponse,
    NoteWrite,
)
from notedesk.services.note_store import NoteStore
from notedesk.services.validation import resolve_category, validate_note

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.post(
    "/notes",
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteWrite] = Body(default=None),
    store: NoteStore = Depends(get_note_store),
) -> NoteCreatedResponse:
    """Validate the payload, insert it and return the assigned id."""
    validate_note(payload)
    note_id = await store.insert(
        title=payload.title,
        description=payload.description,
        category=resolve_category(payload.category),
    )
    return NoteCreatedResponse(id=note_id, message="Note created successfully")


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List notes, optionally filtered",
    description=(
        "Returns every note ordered by creation time, newest first. "
        "`search` matches a substring of the title or description; "
        "`category` must match exactly. Both filters combine with AND."
    ),
)
async def list_notes(
    search: Optional[str] = Query(
        default=None, description="Substring to look for in title or description"
    ),
    category: Optional[str] = Query(default=None, description="Exact category to keep"),
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = await store.list_notes(search=search, category=category)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get a single note by id",
)
async def get_note(
    note_id: int,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    note = await store.get(note_id)
    return NoteResponse.model_validate(note)


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Replace a note",
)
async def update_note(
    note_id: int,
    payload: Optional[NoteWrite] = Body(default=None),
    store: NoteStore = Depends(get_note_store),
) -> MessageResponse:
    """
    Replace title, description, category and completed of a note.

    Validation runs first, so an invalid payload for a missing id yields 400,
    not 404. Omitted category/completed are written as "Others"/false.
    """
    validate_note(payload)
    await store.replace(
        note_id=note_id,
        title=payload.title,
        description=payload.description,
        category=resolve_category(payload.category),
        completed=bool(payload.completed),
    )
    return MessageResponse(message="Note updated successfully")


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    store: NoteStore = Depends(get_note_store),
) -> MessageResponse:
    await store.delete(note_id)
    return MessageResponse(message="Note deleted successfully")
