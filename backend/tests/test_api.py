"""
Digital Life Lessons API — HTTP Endpoint Tests
================================================

What:  End-to-end request/response tests through the FastAPI app.
How:   HTTPX AsyncClient over ASGITransport; get_database is overridden with
       the in-memory store, so these exercise routing, body validation,
       services and exception handlers together.
"""

import pytest
from bson import ObjectId


class TestLiveness:

    @pytest.mark.asyncio
    async def test_root_returns_plain_text(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "running" in response.text

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")

        assert response.headers["X-Request-ID"]


class TestLessonEndpoints:

    @pytest.mark.asyncio
    async def test_create_then_get_has_zeroed_counters(self, test_client):
        created = await test_client.post("/lessons", json={"title": "A", "category": "grief"})
        assert created.status_code == 200
        lesson_id = created.json()["insertedId"]

        response = await test_client.get(f"/lessons/{lesson_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == lesson_id
        assert body["title"] == "A"
        assert body["likesCount"] == 0
        assert body["favoritesCount"] == 0
        assert body["likes"] == []
        assert body["recommended"] == []

    @pytest.mark.asyncio
    async def test_like_twice_round_trip(self, test_client):
        lesson_id = (await test_client.post("/lessons", json={"title": "A"})).json()["insertedId"]

        first = await test_client.patch(f"/lessons/{lesson_id}/like", json={"userId": "u1"})
        assert first.status_code == 200
        assert first.json() == {"liked": True}
        assert (await test_client.get(f"/lessons/{lesson_id}")).json()["likesCount"] == 1

        second = await test_client.patch(f"/lessons/{lesson_id}/like", json={"userId": "u1"})
        assert second.json() == {"liked": False}
        assert (await test_client.get(f"/lessons/{lesson_id}")).json()["likesCount"] == 0

    @pytest.mark.asyncio
    async def test_like_unknown_lesson_404(self, test_client):
        response = await test_client.patch(f"/lessons/{ObjectId()}/like", json={"userId": "u1"})

        assert response.status_code == 404
        assert response.json()["message"] == "Lesson not found"

    @pytest.mark.asyncio
    async def test_like_without_user_id_400(self, test_client):
        lesson_id = (await test_client.post("/lessons", json={"title": "A"})).json()["insertedId"]

        response = await test_client.patch(f"/lessons/{lesson_id}/like", json={})

        assert response.status_code == 400
        assert "userId" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_get_malformed_id_404(self, test_client):
        response = await test_client.get("/lessons/not-an-id")

        assert response.status_code == 404
        assert response.json()["message"] == "Lesson not found"

    @pytest.mark.asyncio
    async def test_list_lessons_newest_first(self, test_client, make_lesson):
        old = await make_lesson(age_minutes=60)
        new = await make_lesson(age_minutes=1)

        response = await test_client.get("/lessons")

        assert response.status_code == 200
        assert [l["_id"] for l in response.json()] == [new, old]


class TestFavoriteEndpoints:

    @pytest.mark.asyncio
    async def test_add_twice_keeps_count_at_one(self, test_client, make_lesson):
        lesson_id = await make_lesson()
        body = {"lessonId": lesson_id, "userEmail": "a@x.com"}

        first = await test_client.post("/favorites", json=body)
        second = await test_client.post("/favorites", json=body)

        assert first.json() == {"success": True}
        assert second.status_code == 200
        assert second.json() == {"message": "Already favorited"}
        lesson = (await test_client.get(f"/lessons/{lesson_id}")).json()
        assert lesson["favoritesCount"] == 1

    @pytest.mark.asyncio
    async def test_delete_returns_delete_result(self, test_client, make_lesson):
        lesson_id = await make_lesson()
        body = {"lessonId": lesson_id, "userEmail": "a@x.com"}
        await test_client.post("/favorites", json=body)

        removed = await test_client.request("DELETE", "/favorites", json=body)
        again = await test_client.request("DELETE", "/favorites", json=body)

        assert removed.json() == {"acknowledged": True, "deletedCount": 1}
        assert again.json() == {"acknowledged": True, "deletedCount": 0}
        lesson = (await test_client.get(f"/lessons/{lesson_id}")).json()
        assert lesson["favoritesCount"] == 0

    @pytest.mark.asyncio
    async def test_add_missing_email_400(self, test_client):
        response = await test_client.post("/favorites", json={"lessonId": "L1"})

        assert response.status_code == 400
        assert "userEmail" in response.json()["message"]


class TestReportEndpoints:

    @pytest.mark.asyncio
    async def test_duplicate_report_400(self, test_client):
        body = {"lessonId": "L1", "reporterEmail": "r@x.com", "reason": "spam"}

        first = await test_client.post("/reports", json=body)
        second = await test_client.post("/reports", json=body)

        assert first.json() == {"success": True}
        assert second.status_code == 400
        assert second.json()["message"] == "Already reported"
        assert "request_id" in second.json()


class TestCommentEndpoints:

    @pytest.mark.asyncio
    async def test_post_and_list(self, test_client):
        posted = await test_client.post(
            "/comments",
            json={"lessonId": "L1", "commenterEmail": "c@x.com", "commenterName": "Cee", "comment": "Nice"},
        )
        await test_client.post("/comments", json={"lessonId": "L2", "comment": "Other"})

        assert posted.json() == {"success": True}
        for_l1 = (await test_client.get("/comments", params={"lessonId": "L1"})).json()
        everything = (await test_client.get("/comments")).json()
        assert [c["comment"] for c in for_l1] == ["Nice"]
        assert len(everything) == 2


class TestUserEndpoints:

    @pytest.mark.asyncio
    async def test_create_list_and_status(self, test_client):
        created = await test_client.post("/users", json={"email": "a@x.com", "name": "Ann"})
        duplicate = await test_client.post("/users", json={"email": "a@x.com"})

        assert created.json()["acknowledged"] is True
        assert duplicate.json() == {"message": "User already exists"}

        users = (await test_client.get("/users", params={"email": "a@x.com"})).json()
        assert len(users) == 1
        assert users[0]["role"] == "user"

        status = await test_client.get("/users/a@x.com/status")
        assert status.json() == {"isPremium": False, "role": "user"}

    @pytest.mark.asyncio
    async def test_status_for_unknown_user_defaults(self, test_client):
        response = await test_client.get("/users/nobody@x.com/status")

        assert response.status_code == 200
        assert response.json() == {"isPremium": False, "role": "user"}


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_database_error_maps_to_500(self, failing_db):
        from httpx import ASGITransport, AsyncClient

        from lifelessons.database import get_database
        from lifelessons.main import create_app

        app = create_app()
        app.dependency_overrides[get_database] = lambda: failing_db
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            lessons = await client.get("/lessons")
            like = await client.patch(f"/lessons/{ObjectId()}/like", json={"userId": "u1"})
            health = await client.get("/health")

        assert lessons.status_code == 500
        assert lessons.json()["message"] == "Failed to fetch lessons"
        assert like.status_code == 500
        assert like.json()["message"] == "Failed to update like"
        assert health.status_code == 503
        assert health.json()["database"] == "disconnected"


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_catch_all_keeps_request_id(self, mongo_db):
        from httpx import ASGITransport, AsyncClient

        from lifelessons.database import get_database
        from lifelessons.main import create_app

        async def explode():
            raise RuntimeError("boom")

        app = create_app()
        app.dependency_overrides[get_database] = lambda: mongo_db
        app.add_api_route("/explode", explode, methods=["GET"])
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode", headers={"X-Request-ID": "rid42"})

        assert response.status_code == 500
        assert response.json() == {
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": "rid42",
        }
        assert response.headers["X-Request-ID"] == "rid42"
