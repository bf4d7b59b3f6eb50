"""
Digital Life Lessons API — Comment Service
============================================

What:  Append-only comment log keyed by lesson id.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from lifelessons.database import COMMENTS
from lifelessons.exceptions import DatabaseError
from lifelessons.models.documents import new_comment_document, to_public

logger = logging.getLogger(__name__)


class CommentService:

    async def list_comments(
        self, db: AsyncIOMotorDatabase, lesson_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Comments for one lesson (or all comments), newest first."""
        query = {"lessonId": lesson_id} if lesson_id else {}
        try:
            cursor = db[COMMENTS].find(query, sort=[("createdAt", DESCENDING)])
            comments = await cursor.to_list(length=None)
        except Exception as e:
            logger.error("Database error listing comments: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch comments",
                context={"lesson_id": lesson_id},
            )
        return [to_public(c) for c in comments]

    async def post_comment(
        self,
        db: AsyncIOMotorDatabase,
        lesson_id: str,
        commenter_email: Optional[str],
        commenter_name: Optional[str],
        comment: str,
    ) -> Dict[str, Any]:
        document = new_comment_document(lesson_id, commenter_email, commenter_name, comment)
        try:
            await db[COMMENTS].insert_one(document)
        except Exception as e:
            logger.error("Database error posting comment: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to post comment",
                context={"lesson_id": lesson_id},
            )
        return {"success": True}


comment_service = CommentService()
