"""
Digital Life Lessons API — Lesson Service
===========================================

What:  Lesson listing, creation, detail-with-recommendations and like toggling.
Why:   Keeps store queries and the likes/likesCount pairing out of the routes.
Who:   Called by routes/lessons.py; receives the database handle per call.

Like Toggle Consistency:
    `likes` is a set of liker ids and `likesCount` its cardinality. Both change
    in one update_one, so a single toggle can never split them. Membership is
    read first (check), then the update is filtered on that same membership
    (act). If another request toggled in between, the filter no longer matches
    and the update is a no-op: the counter is left alone instead of drifting.

    ┌───────────┐  liked?  ┌──────────────────────────────────────────────┐
    │ find_one  │────yes──▶│ {_id, likes: uid}       $pull + $inc -1      │
    │ (lesson)  │────no───▶│ {_id, likes: {$ne:uid}} $addToSet + $inc +1  │
    └───────────┘          └──────────────────────────────────────────────┘
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from lifelessons.database import LESSONS
from lifelessons.exceptions import DatabaseError, LifeLessonsError, NotFoundError
from lifelessons.models.documents import (
    insert_result,
    new_lesson_document,
    parse_object_id,
    to_public,
)

logger = logging.getLogger(__name__)

# Upper bound on lessons attached to GET /lessons/{id}
RECOMMENDED_LIMIT = 6


class LessonService:
    """
    Business logic layer for lesson operations.

    Error Handling Strategy:
        NotFoundError propagates as-is. Any other failure is wrapped in a
        DatabaseError whose message is fixed per operation.
    """

    async def list_lessons(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        """All lessons (public and premium), newest first."""
        try:
            cursor = db[LESSONS].find({}, sort=[("createdAt", DESCENDING)])
            lessons = await cursor.to_list(length=None)
        except Exception as e:
            logger.error("Database error listing lessons: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch lessons",
                context={"error_type": type(e).__name__},
            )
        return [to_public(lesson) for lesson in lessons]

    async def create_lesson(
        self, db: AsyncIOMotorDatabase, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a lesson with zeroed counters and an empty liker set.

        Args:
            fields: Client-supplied lesson content. `likes`, `likesCount`,
                    `favoritesCount` and `createdAt` are overwritten.
        """
        document = new_lesson_document(fields)
        try:
            result = await db[LESSONS].insert_one(document)
        except Exception as e:
            logger.error("Database error creating lesson: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create lesson",
                context={"error_type": type(e).__name__},
            )
        logger.info("Lesson created: %s", result.inserted_id)
        return insert_result(result)

    async def get_lesson(self, db: AsyncIOMotorDatabase, lesson_id: str) -> Dict[str, Any]:
        """
        Fetch one lesson with up to six recommendations attached.

        Recommendations share the lesson's category OR emotional tone, are
        public, and exclude the lesson itself.

        Raises:
            NotFoundError: Unknown or malformed id (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        oid = parse_object_id(lesson_id)
        if oid is None:
            raise NotFoundError(resource="Lesson", resource_id=lesson_id)

        try:
            lesson = await db[LESSONS].find_one({"_id": oid})
            if lesson is None:
                raise NotFoundError(resource="Lesson", resource_id=lesson_id)

            cursor = db[LESSONS].find(
                {
                    "_id": {"$ne": lesson["_id"]},
                    "$or": [
                        {"category": lesson.get("category")},
                        {"emotionalTone": lesson.get("emotionalTone")},
                    ],
                    "accessLevel": "public",
                },
                limit=RECOMMENDED_LIMIT,
            )
            recommended = await cursor.to_list(length=RECOMMENDED_LIMIT)
        except LifeLessonsError:
            raise
        except Exception as e:
            logger.error("Database error fetching lesson %s: %s", lesson_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch lesson",
                context={"lesson_id": lesson_id},
            )

        lesson["recommended"] = [to_public(r) for r in recommended]
        return to_public(lesson)

    async def toggle_like(self, db: AsyncIOMotorDatabase, lesson_id: str, user_id: str) -> bool:
        """
        Invert `user_id`'s membership in the lesson's `likes` set.

        Returns:
            True if the user now likes the lesson, False otherwise.

        Raises:
            NotFoundError: Unknown or malformed lesson id (→ 404)
            DatabaseError: Read or update failed (→ 500)
        """
        oid = parse_object_id(lesson_id)
        if oid is None:
            raise NotFoundError(resource="Lesson", resource_id=lesson_id)

        try:
            lesson = await db[LESSONS].find_one({"_id": oid}, {"likes": 1})
            if lesson is None:
                raise NotFoundError(resource="Lesson", resource_id=lesson_id)

            already_liked = user_id in (lesson.get("likes") or [])

            if already_liked:
                query = {"_id": oid, "likes": user_id}
                update = {"$pull": {"likes": user_id}, "$inc": {"likesCount": -1}}
            else:
                query = {"_id": oid, "likes": {"$ne": user_id}}
                update = {"$addToSet": {"likes": user_id}, "$inc": {"likesCount": 1}}

            result = await db[LESSONS].update_one(query, update)
        except LifeLessonsError:
            raise
        except Exception as e:
            logger.error("Database error toggling like on %s: %s", lesson_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to update like",
                context={"lesson_id": lesson_id, "user_id": user_id},
            )

        if result.modified_count == 0:
            # A concurrent toggle already moved membership to the requested state
            logger.debug(
                "Like toggle on %s by %s matched no document; membership already changed",
                lesson_id,
                user_id,
            )

        return not already_liked


# ── Singleton Instance ────────────────────────────────────────────────────
lesson_service = LessonService()
