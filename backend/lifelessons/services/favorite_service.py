"""
Digital Life Lessons API — Favorite Service
=============================================

What:  Adds and removes favorites and keeps the lesson's `favoritesCount`
       in step with the favorites collection.
Who:   Called by routes/favorites.py.

Counter Maintenance:
    Add:    find_one (exists?) → insert_one → $inc favoritesCount +1
    Remove: delete_one → if deletedCount == 1 → $inc favoritesCount -1

    The favorite write and the counter write are two separate operations with
    no transaction between them. If the process dies between the two, the
    counter drifts by one. The unique (lessonId, userEmail) index created at
    startup closes the other hole: two concurrent adds cannot both insert, so
    the counter is incremented at most once per favorite.
"""

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from lifelessons.database import FAVORITES, LESSONS
from lifelessons.exceptions import DatabaseError
from lifelessons.models.documents import (
    delete_result,
    new_favorite_document,
    parse_object_id,
)

logger = logging.getLogger(__name__)

ALREADY_FAVORITED = "Already favorited"


class FavoriteService:
    """Business logic for favorites (bookmarks of lessons)."""

    async def _adjust_count(self, db: AsyncIOMotorDatabase, lesson_id: str, delta: int) -> None:
        # lessonId is opaque on favorites; a value that is not an ObjectId
        # cannot address a lesson, so there is no counter to adjust.
        oid = parse_object_id(lesson_id)
        if oid is None:
            logger.warning("Favorite references non-ObjectId lesson id %r; count not adjusted", lesson_id)
            return
        await db[LESSONS].update_one({"_id": oid}, {"$inc": {"favoritesCount": delta}})

    async def add_favorite(
        self, db: AsyncIOMotorDatabase, lesson_id: str, user_email: str
    ) -> Dict[str, Any]:
        """
        Record a favorite unless one already exists for (lesson, user).

        Returns:
            {"success": True} when inserted, {"message": "Already favorited"}
            when the pair already existed. Both are HTTP 200.
        """
        try:
            exists = await db[FAVORITES].find_one({"lessonId": lesson_id, "userEmail": user_email})
            if exists:
                return {"message": ALREADY_FAVORITED}

            try:
                await db[FAVORITES].insert_one(new_favorite_document(lesson_id, user_email))
            except DuplicateKeyError:
                # Lost the race against a concurrent add of the same pair
                logger.info("Concurrent favorite for %s by %s", lesson_id, user_email)
                return {"message": ALREADY_FAVORITED}

            await self._adjust_count(db, lesson_id, 1)
        except Exception as e:
            logger.error("Database error adding favorite: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add favorite",
                context={"lesson_id": lesson_id, "user_email": user_email},
            )

        logger.info("Favorite added: lesson=%s user=%s", lesson_id, user_email)
        return {"success": True}

    async def remove_favorite(
        self, db: AsyncIOMotorDatabase, lesson_id: str, user_email: str
    ) -> Dict[str, Any]:
        """
        Delete the favorite for (lesson, user) if present.

        The counter is decremented only when a document was actually deleted,
        so removing a favorite that does not exist leaves it untouched.

        Returns:
            The delete result: {"acknowledged": bool, "deletedCount": 0 | 1}
        """
        try:
            result = await db[FAVORITES].delete_one({"lessonId": lesson_id, "userEmail": user_email})
            if result.deleted_count == 1:
                await self._adjust_count(db, lesson_id, -1)
        except Exception as e:
            logger.error("Database error removing favorite: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to remove favorite",
                context={"lesson_id": lesson_id, "user_email": user_email},
            )

        if result.deleted_count:
            logger.info("Favorite removed: lesson=%s user=%s", lesson_id, user_email)
        return delete_result(result)


# ── Singleton Instance ────────────────────────────────────────────────────
favorite_service = FavoriteService()
