"""
NoteDesk Backend: FastAPI Dependencies
=========================================

What:  Accessors for the process-wide objects the lifespan publishes on
       `app.state` (Database, NoteStore).
How:   Route handlers declare `Depends(get_note_store)` / `Depends(get_database)`.
       Tests can assign `app.state.database` / `app.state.note_store` directly.
"""

from fastapi import Request

from notedesk.database import Database
from notedesk.services.note_store import NoteStore


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store
