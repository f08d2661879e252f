"""
NoteDesk Backend: Notes API Tests
====================================

What:  End-to-end tests of /api/notes through the ASGI app.
How:   HTTPX AsyncClient + ASGITransport against a per-test SQLite file.

What we test:
    ✅ Create → list → update → list → delete → list scenario
    ✅ Status codes and exact error bodies (400 / 404 / 500)
    ✅ Validation runs before the not-found check on update
    ✅ Search / category query parameters
    ✅ Unparseable and out-of-range ids answer 404
    ✅ CORS and request-id headers, access line per operation
"""

import logging
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import text

from notedesk.exceptions import StoreError

# One past SQLite's largest INTEGER
OUT_OF_RANGE_ID = 2**64


async def _drop_notes_table(database):
    async with database.engine.begin() as conn:
        await conn.execute(text("DROP TABLE notes"))


class TestNoteLifecycle:

    @pytest.mark.asyncio
    async def test_full_scenario(self, test_client, sample_note):
        created = await test_client.post("/api/notes", json=sample_note)
        assert created.status_code == 200
        assert created.json() == {"id": 1, "message": "Note created successfully"}

        listed = await test_client.get("/api/notes", params={"category": "Personal"})
        assert listed.status_code == 200
        notes = listed.json()
        assert len(notes) == 1
        assert notes[0]["id"] == 1
        assert notes[0]["title"] == "Buy milk"
        assert notes[0]["description"] == "2%"
        assert notes[0]["category"] == "Personal"
        assert notes[0]["completed"] is False

        updated = await test_client.put(
            "/api/notes/1", json={**sample_note, "completed": True}
        )
        assert updated.status_code == 200
        assert updated.json() == {"message": "Note updated successfully"}

        listed = await test_client.get("/api/notes")
        assert listed.json()[0]["completed"] is True

        deleted = await test_client.delete("/api/notes/1")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Note deleted successfully"}

        listed = await test_client.get("/api/notes")
        assert listed.json() == []


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_category_defaults_to_others(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": "Idea", "description": "Later"}
        )
        note_id = response.json()["id"]

        note = (await test_client.get(f"/api/notes/{note_id}")).json()
        assert note["category"] == "Others"
        assert note["completed"] is False
        assert note["created_at"] == note["updated_at"]

    @pytest.mark.asyncio
    async def test_completed_is_ignored_on_create(self, test_client, sample_note):
        response = await test_client.post("/api/notes", json={**sample_note, "completed": True})
        note_id = response.json()["id"]

        note = (await test_client.get(f"/api/notes/{note_id}")).json()
        assert note["completed"] is False

    @pytest.mark.asyncio
    async def test_empty_title_is_rejected(self, test_client):
        response = await test_client.post("/api/notes", json={"title": "", "description": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Title and description are required"}

    @pytest.mark.asyncio
    async def test_missing_body_is_rejected(self, test_client):
        response = await test_client.post("/api/notes")

        assert response.status_code == 400
        assert response.json() == {"error": "Title and description are required"}

    @pytest.mark.asyncio
    async def test_invalid_category_is_rejected(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": "t", "description": "d", "category": "Urgent"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid category"}
        assert (await test_client.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_wrong_json_type_is_a_client_error(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": ["not", "text"], "description": "d"}
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request")

    @pytest.mark.asyncio
    async def test_store_failure_returns_engine_message(self, test_client, note_store, sample_note):
        with patch.object(
            note_store, "insert", AsyncMock(side_effect=StoreError(message="disk I/O error"))
        ):
            response = await test_client.post("/api/notes", json=sample_note)

        assert response.status_code == 500
        assert response.json() == {"error": "disk I/O error"}

    @pytest.mark.asyncio
    async def test_validation_failure_never_reaches_store(self, test_client, note_store):
        with patch.object(note_store, "insert", AsyncMock()) as insert:
            await test_client.post("/api/notes", json={"title": "t"})

        insert.assert_not_awaited()


class TestListNotes:

    @pytest.mark.asyncio
    async def test_returns_full_rows_newest_first(self, test_client):
        for title in ("first", "second", "third"):
            await test_client.post("/api/notes", json={"title": title, "description": "d"})

        notes = (await test_client.get("/api/notes")).json()

        assert [n["title"] for n in notes] == ["third", "second", "first"]
        assert set(notes[0]) == {
            "id", "title", "description", "category", "completed", "created_at", "updated_at",
        }

    @pytest.mark.asyncio
    async def test_search_and_category_params(self, test_client):
        await test_client.post(
            "/api/notes", json={"title": "Team sync", "description": "agenda", "category": "Work"}
        )
        await test_client.post(
            "/api/notes", json={"title": "Groceries", "description": "sync list", "category": "Personal"}
        )

        by_search = (await test_client.get("/api/notes", params={"search": "sync"})).json()
        by_both = (
            await test_client.get("/api/notes", params={"search": "sync", "category": "Work"})
        ).json()
        by_missing = (await test_client.get("/api/notes", params={"category": "Others"})).json()

        assert {n["title"] for n in by_search} == {"Team sync", "Groceries"}
        assert [n["title"] for n in by_both] == ["Team sync"]
        assert by_missing == []

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, test_client, note_store):
        with patch.object(
            note_store, "list_notes", AsyncMock(side_effect=StoreError(message="database is locked"))
        ):
            response = await test_client.get("/api/notes")

        assert response.status_code == 500
        assert response.json() == {"error": "database is locked"}


class TestGetNote:

    @pytest.mark.asyncio
    async def test_missing_note_is_404(self, test_client):
        response = await test_client.get("/api/notes/42")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_out_of_range_id_is_404(self, test_client):
        response = await test_client.get(f"/api/notes/{OUT_OF_RANGE_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_non_integer_id_is_404(self, test_client):
        response = await test_client.get("/api/notes/abc")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_missing_note_is_404(self, test_client, sample_note):
        response = await test_client.put("/api/notes/999", json=sample_note)

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_validation_wins_over_not_found(self, test_client):
        response = await test_client.put("/api/notes/999", json={"title": "", "description": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Title and description are required"}

    @pytest.mark.asyncio
    async def test_update_is_full_replacement(self, test_client):
        created = await test_client.post(
            "/api/notes", json={"title": "t", "description": "d", "category": "Work"}
        )
        note_id = created.json()["id"]
        await test_client.put(
            f"/api/notes/{note_id}",
            json={"title": "t", "description": "d", "category": "Work", "completed": True},
        )

        await test_client.put(f"/api/notes/{note_id}", json={"title": "T2", "description": "D2"})

        note = (await test_client.get(f"/api/notes/{note_id}")).json()
        assert note["title"] == "T2"
        assert note["description"] == "D2"
        assert note["category"] == "Others"
        assert note["completed"] is False

    @pytest.mark.asyncio
    async def test_updated_at_moves_forward(self, test_client, sample_note):
        note_id = (await test_client.post("/api/notes", json=sample_note)).json()["id"]
        before = (await test_client.get(f"/api/notes/{note_id}")).json()

        await test_client.put(f"/api/notes/{note_id}", json={**sample_note, "title": "Buy oat milk"})

        after = (await test_client.get(f"/api/notes/{note_id}")).json()
        assert after["created_at"] == before["created_at"]
        assert datetime.fromisoformat(after["updated_at"]) >= datetime.fromisoformat(
            before["updated_at"]
        )

    @pytest.mark.asyncio
    async def test_invalid_category_is_rejected(self, test_client, sample_note):
        note_id = (await test_client.post("/api/notes", json=sample_note)).json()["id"]

        response = await test_client.put(
            f"/api/notes/{note_id}", json={**sample_note, "category": "Chores"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid category"}

    @pytest.mark.asyncio
    async def test_out_of_range_id_is_404(self, test_client, sample_note):
        response = await test_client.put(f"/api/notes/{OUT_OF_RANGE_ID}", json=sample_note)

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_non_integer_id_is_404(self, test_client, sample_note):
        response = await test_client.put("/api/notes/abc", json=sample_note)

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_store_failure_returns_engine_message(
        self, test_client, database, sample_note
    ):
        await _drop_notes_table(database)

        response = await test_client.put("/api/notes/1", json=sample_note)

        assert response.status_code == 500
        assert "no such table: notes" in response.json()["error"]


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_delete_twice_is_404_not_500(self, test_client, sample_note):
        note_id = (await test_client.post("/api/notes", json=sample_note)).json()["id"]
        await test_client.delete(f"/api/notes/{note_id}")

        response = await test_client.delete(f"/api/notes/{note_id}")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_non_integer_id_is_404(self, test_client):
        response = await test_client.delete("/api/notes/abc")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_out_of_range_id_is_404(self, test_client):
        response = await test_client.delete(f"/api/notes/{OUT_OF_RANGE_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_store_failure_returns_engine_message(self, test_client, database):
        await _drop_notes_table(database)

        response = await test_client.delete("/api/notes/1")

        assert response.status_code == 500
        assert "no such table: notes" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_driver_overflow_is_a_store_error(self, test_client, database):
        overflow = OverflowError("Python int too large to convert to SQLite INTEGER")
        with patch.object(database, "session", side_effect=overflow):
            response = await test_client.delete(
                "/api/notes/1", headers={"Origin": "http://elsewhere.example"}
            )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Python int too large to convert to SQLite INTEGER"
        }
        assert response.headers["access-control-allow-origin"] == "*"


class TestCrossCuttingHeaders:

    @pytest.mark.asyncio
    async def test_any_origin_is_allowed(self, test_client):
        response = await test_client.get(
            "/api/notes", headers={"Origin": "http://elsewhere.example"}
        )

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/notes")

        assert len(response.headers["X-Request-ID"]) == 12

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_oversized_request_id_is_replaced(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "x" * 200})

        assert len(response.headers["X-Request-ID"]) == 12

    @pytest.mark.asyncio
    async def test_access_line_names_operation_and_note(self, test_client, sample_note, caplog):
        note_id = (await test_client.post("/api/notes", json=sample_note)).json()["id"]
        caplog.set_level(logging.INFO, logger="notedesk.access")

        await test_client.delete(f"/api/notes/{note_id}", headers={"X-Request-ID": "trace-7"})

        [record] = [r for r in caplog.records if r.name == "notedesk.access"]
        assert record.operation == "delete_note"
        assert record.note_id == str(note_id)
        assert record.request_id == "trace-7"
        assert record.status == 200
        assert f"delete_note note={note_id} -> 200" in record.getMessage()
