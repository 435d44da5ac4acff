"""
PasteShare Backend - HTTP API Tests
====================================

What:  Exercises the routes end to end through the ASGI app.
How:   httpx AsyncClient over ASGITransport; the app's engine is the
       in-memory SQLite engine from conftest.

What we test:
    ✅ Status codes and headers for every paste endpoint
    ✅ Error bodies for 400 / 404 / 422
    ✅ Writes are committed before the response is sent
    ✅ Download filename and the language table
    ✅ Health check and request IDs
"""

import asyncio
import json
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from pasteshare.main import create_app


async def _create(client, **fields):
    payload = {"title": "Example", "content": "print('hi')", "language": "python"}
    payload.update(fields)
    response = await client.post("/api/pastes", json=payload)
    assert response.status_code == 201
    return response.json()


class TestCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_location(self, test_client):
        response = await test_client.post(
            "/api/pastes", json={"title": "", "content": "  SELECT 1;  ", "language": "sql"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Untitled"
        assert body["content"] == "SELECT 1;"
        assert body["language_label"] == "SQL"
        assert body["user_id"] is None
        assert response.headers["Location"] == f"/api/pastes/{body['id']}"

    @pytest.mark.asyncio
    async def test_create_blank_content_returns_400(self, test_client):
        response = await test_client.post("/api/pastes", json={"content": "   "})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Content is required"

    @pytest.mark.asyncio
    async def test_create_missing_content_returns_422(self, test_client):
        response = await test_client.post("/api/pastes", json={"title": "no body"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_paste(self, test_client):
        created = await _create(test_client, content="a\nb\nc")

        response = await test_client.get(f"/api/pastes/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["line_count"] == 3
        assert body["char_count"] == 5
        assert response.headers["Cache-Control"] == "no-cache"

    @pytest.mark.asyncio
    async def test_get_unknown_paste_returns_404(self, test_client):
        response = await test_client.get(f"/api/pastes/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_invalid_uuid_returns_422(self, test_client):
        response = await test_client.get("/api/pastes/not-a-uuid")
        assert response.status_code == 422


class TestListPastes:

    @pytest.mark.asyncio
    async def test_list_sets_total_count_header(self, test_client):
        await _create(test_client, title="first")
        await _create(test_client, title="hidden", is_public=False)

        response = await test_client.get("/api/pastes")

        assert response.status_code == 200
        body = response.json()
        assert response.headers["X-Total-Count"] == "1"
        assert body["total_count"] == 1
        assert body["page_size"] == 12
        assert [item["title"] for item in body["pastes"]] == ["first"]

    @pytest.mark.asyncio
    async def test_list_filters(self, test_client):
        await _create(test_client, title="flask app", language="python")
        await _create(test_client, title="flask docs", language="text")
        await _create(test_client, title="django app", language="python")

        response = await test_client.get(
            "/api/pastes", params={"q": "FLASK", "language": "python"}
        )

        body = response.json()
        assert [item["title"] for item in body["pastes"]] == ["flask app"]
        assert body["text_query"] == "FLASK"
        assert body["language"] == "python"

    @pytest.mark.asyncio
    async def test_list_page_zero_returns_422(self, test_client):
        response = await test_client.get("/api/pastes", params={"page": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_recent_is_not_treated_as_an_id(self, test_client):
        await _create(test_client)

        response = await test_client.get("/api/pastes/recent")

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestUpdateAndDelete:

    @pytest.mark.asyncio
    async def test_update_paste(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(
            f"/api/pastes/{created['id']}",
            json={"title": "Renamed", "content": "echo hi", "language": "bash", "is_public": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["title"] == "Renamed"
        assert body["language_label"] == "Bash"

    @pytest.mark.asyncio
    async def test_update_blank_content_returns_400(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/api/pastes/{created['id']}", json={"content": ""})

        assert response.status_code == 400
        unchanged = await test_client.get(f"/api/pastes/{created['id']}")
        assert unchanged.json()["content"] == "print('hi')"

    @pytest.mark.asyncio
    async def test_update_unknown_paste_returns_404(self, test_client):
        response = await test_client.put(f"/api/pastes/{uuid4()}", json={"content": "x"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_paste(self, test_client):
        created = await _create(test_client)

        response = await test_client.delete(f"/api/pastes/{created['id']}")
        assert response.status_code == 204

        assert (await test_client.get(f"/api/pastes/{created['id']}")).status_code == 404
        assert (await test_client.delete(f"/api/pastes/{created['id']}")).status_code == 204


class TestWritesCommitBeforeResponding:

    @pytest.mark.asyncio
    async def test_create_commits_before_response_starts(self, engine, monkeypatch):
        events = []
        original_commit = AsyncSession.commit

        async def recording_commit(self):
            events.append("commit")
            await original_commit(self)

        monkeypatch.setattr(AsyncSession, "commit", recording_commit)

        app = create_app(engine=engine)
        body = json.dumps({"title": "durable", "content": "x"}).encode()
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "POST",
            "scheme": "http",
            "path": "/api/pastes",
            "raw_path": b"/api/pastes",
            "root_path": "",
            "query_string": b"",
            "headers": [
                (b"host", b"test"),
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
            "client": ("127.0.0.1", 50000),
            "server": ("test", 80),
        }
        request_sent = False
        response_complete = asyncio.Event()

        async def receive():
            nonlocal request_sent
            if not request_sent:
                request_sent = True
                return {"type": "http.request", "body": body, "more_body": False}
            await response_complete.wait()
            return {"type": "http.disconnect"}

        async def send(message):
            if message["type"] == "http.response.start":
                events.append(f"start {message['status']}")
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                events.append("body-complete")
                response_complete.set()

        await app(scope, receive, send)

        assert "start 201" in events
        assert events.index("commit") < events.index("start 201")

    @pytest.mark.asyncio
    async def test_commit_failure_reaches_the_client(self, test_client, monkeypatch):
        async def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk full"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)

        response = await test_client.post("/api/pastes", json={"content": "x"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "store_error"
        assert "disk full" in body["message"]


class TestDownloadAndLanguages:

    @pytest.mark.asyncio
    async def test_download_uses_title_and_extension(self, test_client):
        created = await _create(test_client, title="My Script!", content="print(1)")

        response = await test_client.get(f"/api/pastes/{created['id']}/download")

        assert response.status_code == 200
        assert response.text == "print(1)"
        assert response.headers["Content-Disposition"] == 'attachment; filename="my_script_.py"'

    @pytest.mark.asyncio
    async def test_download_unknown_paste_returns_404(self, test_client):
        response = await test_client.get(f"/api/pastes/{uuid4()}/download")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_languages(self, test_client):
        response = await test_client.get("/api/languages")

        assert response.status_code == 200
        languages = response.json()
        assert len(languages) == 12
        assert {"value": "bash", "label": "Bash", "extension": "sh"} in languages


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/languages", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/languages")
        assert len(response.headers["X-Request-ID"]) == 8
