"""
NoteDesk Backend: Database Engine & Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory and schema initialization for
       the embedded SQLite store.
How:   A `Database` instance is created once by the application lifespan,
       initialized before the first request is accepted, published on
       `app.state`, and disposed at shutdown.
Who:   Owned by the app factory; used by NoteStore and the health route.

Lifecycle:
    startup   Database(url) → await initialize()   (fatal on failure)
    request   async with database.session() as session: ...
    shutdown  await dispose()
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.get_backend_name().startswith("sqlite"):
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


class Database:
    """
    Process-wide handle on the notes database.

    Attributes:
        url:             SQLAlchemy async URL the engine was created from
        engine:          AsyncEngine owning the connection pool
        session_factory: Produces one AsyncSession per store operation
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = database_url
        _ensure_sqlite_directory(database_url)
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        # expire_on_commit=False: rows stay readable after the session commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def initialize(self) -> None:
        """
        Create the notes table if it does not exist yet.

        What:  Runs CREATE TABLE IF NOT EXISTS for every registered model.
        When:  Once, during application startup, before traffic is accepted.
        How:   metadata.create_all(checkfirst=True); existing tables and rows
               are never dropped or altered.

        Raises:
            Any SQLAlchemy/driver error, after logging it. The caller treats
            this as fatal and does not retry.
        """
        # Registers the Note model on Base.metadata
        from notedesk.models import note  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.exception("Could not initialize notes table at %s", self.url)
            raise
        logger.info("Notes table ready (%s)", self.url)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        Example:
            async with database.session() as session:
                await session.execute(delete(Note).where(Note.id == 1))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> bool:
        """Run `SELECT 1`; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
