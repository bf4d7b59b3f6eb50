"""
Digital Life Lessons API — Test Configuration (conftest.py)
=============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── mongo_db:        In-memory MongoDB (mongomock-motor), empty per test
    ├── failing_db:      Database whose collections raise on every call
    ├── test_client:     HTTPX AsyncClient wired to an app using mongo_db
    └── make_lesson:     Inserts a lesson document and returns its hex id
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "digital_life_lessons_test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("DB_USER", None)
os.environ.pop("DB_PASS", None)


@pytest.fixture
def mongo_db():
    """
    Provides an empty in-memory MongoDB database.

    What:    mongomock-motor exposes the Motor async API over mongomock, so the
             real service queries ($addToSet, $pull, $inc, $or) run unchanged.
    """
    client = AsyncMongoMockClient()
    return client["digital_life_lessons_test"]


@pytest.fixture
def failing_db():
    """
    Provides a database whose every collection operation raises.

    Usage:
        with pytest.raises(DatabaseError):
            await lesson_service.list_lessons(failing_db)
    """
    error = ServerSelectionTimeoutError("No servers found")
    collection = MagicMock()
    for method in ("find_one", "insert_one", "update_one", "delete_one", "create_index"):
        setattr(collection, method, AsyncMock(side_effect=error))
    collection.find.side_effect = error
    db = MagicMock()
    db.__getitem__.return_value = collection
    db.command = AsyncMock(side_effect=error)
    return db


@pytest.fixture
def make_lesson(mongo_db):
    """
    Inserts a lesson straight into the store and returns its hex id.

    Keyword arguments become document fields; counters default to zero and
    createdAt to now minus `age_minutes` so ordering tests are deterministic.
    """

    async def _make(age_minutes: int = 0, **fields) -> str:
        document = {
            "title": "Untitled",
            "createdAt": datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
            "likes": [],
            "likesCount": 0,
            "favoritesCount": 0,
            **fields,
        }
        result = await mongo_db["lessons"].insert_one(document)
        return str(result.inserted_id)

    return _make


@pytest_asyncio.fixture
async def test_client(mongo_db):
    """
    Provides an async HTTP test client for endpoint testing.

    How:  Builds a fresh app and overrides get_database with mongo_db.
          ASGITransport does not run the lifespan, so no real MongoDB is contacted.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from lifelessons.database import get_database
    from lifelessons.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: mongo_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
