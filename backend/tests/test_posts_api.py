"""
Postboard Backend — Posts API Tests
=====================================

What:  End-to-end tests of the /api/posts endpoints.
How:   HTTPX AsyncClient over ASGITransport against the real app, backed by
       a throwaway SQLite database (see conftest.db_tables).

What we test:
    ✅ Create → fetch round trip by assigned ID
    ✅ 400 with per-field errors for missing/invalid fields
    ✅ 400 for malformed IDs, 404 for unknown IDs
    ✅ Full replacement on update; failed update leaves the post untouched
    ✅ Delete returns the removed post
    ✅ Database failures surface as generic 500s
    ✅ Timestamps come back timezone-aware; long text fields are stored whole
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from postboard.exceptions import DatabaseError


async def _create(client, payload) -> str:
    response = await client.post("/api/posts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def _error_fields(response) -> set:
    return {err["field"] for err in response.json()["errors"]}


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    assert parsed.tzinfo is not None, value
    return parsed


class TestCollectionEndpoint:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/posts")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_then_fetch(self, test_client, sample_post_payload):
        response = await test_client.post("/api/posts", json=sample_post_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Post has been created"

        fetched = await test_client.get(f"/api/posts/{body['id']}")
        assert fetched.status_code == 200
        post = fetched.json()
        assert post["id"] == body["id"]
        assert post["author"] == sample_post_payload["author"]
        assert post["title"] == sample_post_payload["title"]
        assert post["description"] == sample_post_payload["description"]
        assert post["imageUrl"] == sample_post_payload["imageUrl"]
        assert post["createdAt"]
        assert post["updatedAt"]

    @pytest.mark.asyncio
    async def test_create_with_client_created_at(self, test_client, sample_post_payload):
        sample_post_payload["createdAt"] = "2023-01-01T00:00:00.000Z"
        post_id = await _create(test_client, sample_post_payload)

        post = (await test_client.get(f"/api/posts/{post_id}")).json()
        assert _parse_timestamp(post["createdAt"]) == datetime(2023, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_stored_timestamps_are_utc(self, test_client, sample_post_payload):
        sample_post_payload["createdAt"] = "2023-06-01T12:00:00+02:00"
        post_id = await _create(test_client, sample_post_payload)

        post = (await test_client.get(f"/api/posts/{post_id}")).json()

        created = _parse_timestamp(post["createdAt"])
        assert created.utcoffset().total_seconds() == 0
        assert created == datetime(2023, 6, 1, 10, 0, tzinfo=timezone.utc)
        assert _parse_timestamp(post["updatedAt"]).utcoffset().total_seconds() == 0

    @pytest.mark.asyncio
    async def test_long_text_fields_stored_whole(self, test_client, sample_post_payload):
        sample_post_payload["author"] = "A" * 300
        sample_post_payload["title"] = "T" * 300
        sample_post_payload["imageUrl"] = "https://example.com/" + "p" * 3000 + ".jpg"
        post_id = await _create(test_client, sample_post_payload)

        post = (await test_client.get(f"/api/posts/{post_id}")).json()

        assert post["author"] == sample_post_payload["author"]
        assert post["title"] == sample_post_payload["title"]
        assert post["imageUrl"] == sample_post_payload["imageUrl"]

    @pytest.mark.asyncio
    async def test_repeated_reads_never_refused(self, test_client):
        statuses = {(await test_client.get("/api/posts")).status_code for _ in range(150)}
        assert statuses == {200}

    @pytest.mark.asyncio
    async def test_list_returns_all_posts(self, test_client, sample_post_payload):
        first = await _create(test_client, {**sample_post_payload, "title": "One"})
        second = await _create(test_client, {**sample_post_payload, "title": "Two"})

        response = await test_client.get("/api/posts")

        assert response.status_code == 200
        ids = {post["id"] for post in response.json()}
        assert ids == {first, second}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["author", "title", "description", "imageUrl"])
    async def test_create_missing_field(self, test_client, sample_post_payload, field):
        del sample_post_payload[field]

        response = await test_client.post("/api/posts", json=sample_post_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert field in _error_fields(response)

    @pytest.mark.asyncio
    async def test_create_invalid_image_url(self, test_client, sample_post_payload):
        sample_post_payload["imageUrl"] = "not-a-url"

        response = await test_client.post("/api/posts", json=sample_post_payload)

        assert response.status_code == 400
        assert _error_fields(response) == {"imageUrl"}

    @pytest.mark.asyncio
    async def test_create_reports_every_bad_field(self, test_client):
        response = await test_client.post(
            "/api/posts", json={"author": "", "imageUrl": "nope"}
        )

        assert response.status_code == 400
        assert _error_fields(response) == {"author", "title", "description", "imageUrl"}

    @pytest.mark.asyncio
    async def test_failed_create_stores_nothing(self, test_client, sample_post_payload):
        sample_post_payload["title"] = ""
        await test_client.post("/api/posts", json=sample_post_payload)

        assert (await test_client.get("/api/posts")).json() == []

    @pytest.mark.asyncio
    async def test_list_database_failure(self, test_client):
        with patch(
            "postboard.routes.posts.post_service.list_posts",
            new=AsyncMock(side_effect=DatabaseError(message="Failed to retrieve posts")),
        ):
            response = await test_client.get("/api/posts")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "Failed to retrieve posts"


class TestSingleResourceEndpoint:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_malformed_id(self, test_client, method):
        response = await getattr(test_client, method)("/api/posts/not-a-valid-id")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid ID format"
        assert body["details"] == {"field": "id"}

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, test_client, sample_post_payload):
        response = await test_client.put("/api/posts/12345", json=sample_post_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID format"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_unknown_id(self, test_client, method):
        response = await getattr(test_client, method)(f"/api/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client, sample_post_payload):
        response = await test_client.put(f"/api/posts/{uuid4()}", json=sample_post_payload)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_replaces_all_fields(self, test_client, sample_post_payload):
        post_id = await _create(test_client, sample_post_payload)
        replacement = {
            "author": "Jane Roe",
            "title": "Rewritten",
            "description": "Completely new body.",
            "imageUrl": "https://cdn.example.com/other.png",
            "createdAt": "2022-02-02T10:00:00Z",
        }

        response = await test_client.put(f"/api/posts/{post_id}", json=replacement)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post updated successfully"
        assert body["post"]["id"] == post_id
        for key in ("author", "title", "description", "imageUrl"):
            assert body["post"][key] == replacement[key]
        assert _parse_timestamp(body["post"]["createdAt"]) == datetime(
            2022, 2, 2, 10, 0, tzinfo=timezone.utc
        )

        fetched = (await test_client.get(f"/api/posts/{post_id}")).json()
        for key in ("author", "title", "description", "imageUrl"):
            assert fetched[key] == replacement[key]
        assert _parse_timestamp(fetched["createdAt"]) == datetime(
            2022, 2, 2, 10, 0, tzinfo=timezone.utc
        )

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_post_unchanged(self, test_client, sample_post_payload):
        post_id = await _create(test_client, sample_post_payload)
        before = (await test_client.get(f"/api/posts/{post_id}")).json()

        response = await test_client.put(
            f"/api/posts/{post_id}",
            json={**sample_post_payload, "title": "Changed", "imageUrl": "not-a-url"},
        )

        assert response.status_code == 400
        assert _error_fields(response) == {"imageUrl"}
        after = (await test_client.get(f"/api/posts/{post_id}")).json()
        assert after == before

    @pytest.mark.asyncio
    async def test_partial_update_rejected(self, test_client, sample_post_payload):
        post_id = await _create(test_client, sample_post_payload)

        response = await test_client.put(f"/api/posts/{post_id}", json={"title": "Only title"})

        assert response.status_code == 400
        assert {"author", "description", "imageUrl"} <= _error_fields(response)

    @pytest.mark.asyncio
    async def test_delete_returns_post_and_removes_it(self, test_client, sample_post_payload):
        post_id = await _create(test_client, sample_post_payload)

        response = await test_client.delete(f"/api/posts/{post_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post deleted successfully"
        assert body["deletedPost"]["id"] == post_id
        assert body["deletedPost"]["title"] == sample_post_payload["title"]

        assert (await test_client.get(f"/api/posts/{post_id}")).status_code == 404
        assert (await test_client.delete(f"/api/posts/{post_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            f"/api/posts/{uuid4()}", headers={"X-Request-ID": "trace-42"}
        )

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"
