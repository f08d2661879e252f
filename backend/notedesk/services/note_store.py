"""
NoteDesk Backend: Note Store (Persistence Operations)
=======================================================

What:  The five statements the API runs against the `notes` table.
How:   Each operation opens its own session from the process-wide Database,
       executes one parameter-bound SQLAlchemy statement and commits.
Who:   Called by the notes route handlers via `get_note_store`.

Operation → statement:
    insert      INSERT INTO notes (title, description, category, ...)
    list_notes  SELECT * FROM notes [WHERE <filter>] ORDER BY created_at DESC, id DESC
    get         SELECT * FROM notes WHERE id = ?
    replace     UPDATE notes SET title=?, description=?, category=?, completed=?,
                updated_at=? WHERE id = ?
    delete      DELETE FROM notes WHERE id = ?

Error Handling Strategy:
    get/replace/delete report a missing row as NotFoundError. An id outside
    SQLite's signed 64-bit INTEGER range cannot match a row, so it is reported
    as NotFoundError without reaching the driver.
    Every SQLAlchemyError, and the OverflowError sqlite3 raises when binding an
    out-of-range integer, becomes a StoreError carrying the driver's message.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from notedesk.database import Database
from notedesk.exceptions import NotFoundError, StoreError
from notedesk.models.note import Note, utcnow

logger = logging.getLogger(__name__)

# SQLite INTEGER PRIMARY KEY bounds
MIN_NOTE_ID = -(2**63)
MAX_NOTE_ID = 2**63 - 1

# sqlite3 raises OverflowError outside SQLAlchemy's wrapping
_DRIVER_ERRORS = (SQLAlchemyError, OverflowError)


def _store_error(operation: str, exc: Exception) -> StoreError:
    """Wrap a SQLAlchemy failure, keeping the storage engine's message."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        message = str(exc.orig)
    else:
        message = str(exc)
    logger.error("Store %s failed: %s", operation, message)
    return StoreError(
        message=message,
        context={"operation": operation, "error_type": type(exc).__name__},
    )


def _require_storable_id(note_id: int) -> None:
    if not MIN_NOTE_ID <= note_id <= MAX_NOTE_ID:
        raise NotFoundError(resource="Note", resource_id=note_id)


def note_filter(
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> Optional[ColumnElement[bool]]:
    """
    Build the WHERE clause for a listing.

    The four variants:
        neither   → None (no WHERE clause)
        search    → title LIKE %s% OR description LIKE %s%
        category  → category = c
        both      → (title LIKE %s% OR description LIKE %s%) AND category = c

    Empty strings count as absent. The search term is bound as a parameter;
    LIKE case handling is SQLite's (ASCII case-insensitive).
    """
    if search:
        pattern = f"%{search}%"
        matches_text = or_(Note.title.like(pattern), Note.description.like(pattern))

    if search and category:
        return and_(matches_text, Note.category == category)
    if search:
        return matches_text
    if category:
        return Note.category == category
    return None


class NoteStore:
    """
    Persistence operations for notes.

    One instance per process, built at startup around the initialized
    Database and shared by every request.
    """

    def __init__(self, database: Database):
        self.database = database

    async def insert(self, title: str, description: str, category: str) -> int:
        """
        Insert a new note and return its id.

        The row starts with completed=False and created_at = updated_at = now.
        """
        now = utcnow()
        note = Note(
            title=title,
            description=description,
            category=category,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.database.session() as session:
                session.add(note)
                await session.flush()  # assigns note.id
                note_id = note.id
        except _DRIVER_ERRORS as e:
            raise _store_error("insert", e)

        logger.info("Note %d created (category=%s)", note_id, category)
        return note_id

    async def list_notes(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Note]:
        """Return matching notes, newest first (ties: higher id first)."""
        query = select(Note)
        clause = note_filter(search=search, category=category)
        if clause is not None:
            query = query.where(clause)
        query = query.order_by(Note.created_at.desc(), Note.id.desc())

        try:
            async with self.database.session() as session:
                result = await session.execute(query)
                notes = list(result.scalars().all())
        except _DRIVER_ERRORS as e:
            raise _store_error("list", e)

        logger.debug(
            "Listed %d notes (search=%r, category=%r)", len(notes), search, category
        )
        return notes

    async def get(self, note_id: int) -> Note:
        """Return the note with `note_id` or raise NotFoundError."""
        _require_storable_id(note_id)
        try:
            async with self.database.session() as session:
                result = await session.execute(select(Note).where(Note.id == note_id))
                note = result.scalar_one_or_none()
        except _DRIVER_ERRORS as e:
            raise _store_error("get", e)

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)
        return note

    async def replace(
        self,
        note_id: int,
        title: str,
        description: str,
        category: str,
        completed: bool,
    ) -> None:
        """
        Overwrite every mutable field of a note and refresh updated_at.

        Raises:
            NotFoundError: No row has `note_id`
            StoreError:    The UPDATE failed
        """
        _require_storable_id(note_id)
        statement = (
            update(Note)
            .where(Note.id == note_id)
            .values(
                title=title,
                description=description,
                category=category,
                completed=completed,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(statement)
                affected = result.rowcount
        except _DRIVER_ERRORS as e:
            raise _store_error("update", e)

        if affected == 0:
            raise NotFoundError(resource="Note", resource_id=note_id)
        logger.info("Note %d updated (completed=%s)", note_id, completed)

    async def delete(self, note_id: int) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: No row has `note_id` (including already-deleted ids)
            StoreError:    The DELETE failed
        """
        _require_storable_id(note_id)
        statement = (
            delete(Note)
            .where(Note.id == note_id)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(statement)
                affected = result.rowcount
        except _DRIVER_ERRORS as e:
            raise _store_error("delete", e)

        if affected == 0:
            raise NotFoundError(resource="Note", resource_id=note_id)
        logger.info("Note %d deleted", note_id)
