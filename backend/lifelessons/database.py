"""
Digital Life Lessons API — Database Client Management
=======================================================

What:  The shared Motor client, the database dependency, index setup and
       lifecycle helpers.
Why:   Centralizes all MongoDB connection logic in one place.
How:   One AsyncIOMotorClient per process, created lazily on first use and
       reused by every request. Route handlers receive the database handle via
       FastAPI's Depends(get_database), so tests can override it with a fake.
Who:   Used by route handlers (dependency), the lifespan (ping, indexes, close)
       and the health check.

Connection Pooling:
    Motor (via PyMongo) keeps its own connection pool per client. We do not
    tune it; a single long-lived client is all the service needs.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from lifelessons.config import settings

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
USERS = "users"
LESSONS = "lessons"
COMMENTS = "comments"
REPORTS = "reports"
FAVORITES = "favorites"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """
    Return the process-wide Motor client, creating it on first call.

    Creating the client does not open a connection; the driver connects
    lazily on the first operation.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongo_connection_uri,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database handle.

    Example usage in a route:
        @router.get("/lessons")
        async def list_lessons(db: AsyncIOMotorDatabase = Depends(get_database)):
            return await lesson_service.list_lessons(db)
    """
    return get_client()[settings.database_name]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping(db: AsyncIOMotorDatabase) -> None:
    """Round-trip a ping command; raises PyMongoError when unreachable."""
    await db.command("ping")


async def ping_with_retry(db: AsyncIOMotorDatabase) -> bool:
    """
    What:  Confirms the deployment is reachable at startup.
    How:   Retries the ping with exponential backoff + jitter via tenacity.
    Returns True on success, False once attempts are exhausted.
    """
    try:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(PyMongoError),
            stop=stop_after_attempt(settings.db_connect_max_attempts),
            wait=wait_exponential_jitter(
                initial=settings.db_connect_min_wait,
                max=settings.db_connect_max_wait,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await ping(db)
    except PyMongoError as e:
        logger.error(
            "MongoDB unreachable after %d attempts: %s",
            settings.db_connect_max_attempts,
            str(e),
        )
        return False
    logger.info("Pinged deployment; connected to MongoDB database '%s'", db.name)
    return True


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    What:  Creates the indexes the services rely on.
    When:  Called once during application startup.

    The unique indexes turn favorite, report and user inserts into the
    authoritative "insert iff absent" check. Existing duplicate data makes
    creation fail; that is logged and startup continues without the index.
    """
    specs = [
        (FAVORITES, [("lessonId", ASCENDING), ("userEmail", ASCENDING)], True),
        (REPORTS, [("lessonId", ASCENDING), ("reporterEmail", ASCENDING)], True),
        (COMMENTS, [("lessonId", ASCENDING), ("createdAt", DESCENDING)], False),
        (USERS, [("email", ASCENDING)], True),
    ]
    for collection, keys, unique in specs:
        try:
            await db[collection].create_index(keys, unique=unique)
        except PyMongoError as e:
            logger.warning(
                "Could not create index %s on '%s': %s", keys, collection, str(e)
            )


def close_client() -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
