"""
NoteDesk Backend: Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table in SQLite.
How:   Inherits from the shared DeclarativeBase; Database.initialize() creates
       the table from this definition.
Who:   Used by NoteStore for every statement it executes.

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT: ids increase monotonically and are
      never reused after a delete
    - category: constrained to Work / Personal / Others by a CHECK constraint
    - completed: SQLAlchemy Boolean, stored as 0/1 by SQLite
    - created_at / updated_at: UTC timestamps, updated_at refreshed on replace

    Index on created_at serves the "newest first" listing (scanned backwards).
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notedesk.database import Base


class Category(str, enum.Enum):
    """Fixed classification of a note."""

    WORK = "Work"
    PERSONAL = "Personal"
    OTHERS = "Others"


NOTE_CATEGORIES = tuple(c.value for c in Category)
DEFAULT_CATEGORY = Category.OTHERS.value


def utcnow() -> datetime:
    """Current UTC time, the single clock for created_at/updated_at."""
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note row.

    Lifecycle:
        1. Inserted with completed=False, created_at = updated_at = now
        2. Replaced in full (title, description, category, completed);
           updated_at refreshed
        3. Deleted (hard delete, no soft-delete or history)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_CATEGORY,
        server_default=text(f"'{DEFAULT_CATEGORY}'"),
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        CheckConstraint(
            "category IN ({})".format(", ".join(f"'{c}'" for c in NOTE_CATEGORIES)),
            name="ck_notes_category",
        ),
        Index("idx_notes_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, category='{self.category}', "
            f"completed={self.completed})>"
        )
