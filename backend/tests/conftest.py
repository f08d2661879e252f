"""
NoteDesk Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    database     Initialized Database on a SQLite file under tmp_path
    note_store   NoteStore bound to that database
    test_client  HTTPX AsyncClient talking to a fresh app wired to note_store
    sample_note  Valid create payload
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the test run away from a developer's notes.db and .env values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test-notes.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

from notedesk.database import Database  # noqa: E402
from notedesk.services.note_store import NoteStore  # noqa: E402


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides an initialized Database backed by a throwaway SQLite file.

    Usage:
        async def test_ping(database):
            assert await database.ping()
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await db.initialize()
    yield db
    await db.dispose()


@pytest.fixture
def note_store(database):
    return NoteStore(database)


@pytest.fixture
def sample_note():
    """A create payload that passes validation."""
    return {
        "title": "Buy milk",
        "description": "2%",
        "category": "Personal",
    }


@pytest_asyncio.fixture
async def test_client(database, note_store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the fixture publishes the
    test database and store on app.state the way the lifespan would.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    from notedesk.main import create_app

    app = create_app()
    app.state.database = database
    app.state.note_store = note_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
