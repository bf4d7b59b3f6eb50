"""
Digital Life Lessons API — Report Service
===========================================

What:  Records user reports against lessons, one per (lesson, reporter).
Who:   Called by routes/reports.py.

Unlike favorites, a duplicate report is a client error (400 "Already reported").
"""

import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from lifelessons.database import REPORTS
from lifelessons.exceptions import ConflictError, DatabaseError, LifeLessonsError
from lifelessons.models.documents import new_report_document

logger = logging.getLogger(__name__)


class ReportService:

    async def submit_report(
        self,
        db: AsyncIOMotorDatabase,
        lesson_id: str,
        reporter_email: str,
        reason: Optional[str],
    ) -> Dict[str, Any]:
        """
        Insert a report unless the reporter already reported this lesson.

        Raises:
            ConflictError: The pair already has a report (→ 400)
            DatabaseError: Lookup or insert failed (→ 500)
        """
        try:
            existing = await db[REPORTS].find_one(
                {"lessonId": lesson_id, "reporterEmail": reporter_email}
            )
            if existing:
                raise ConflictError(message="Already reported")

            await db[REPORTS].insert_one(new_report_document(lesson_id, reporter_email, reason))
        except DuplicateKeyError:
            raise ConflictError(message="Already reported")
        except LifeLessonsError:
            raise
        except Exception as e:
            logger.error("Database error submitting report: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to report lesson",
                context={"lesson_id": lesson_id, "reporter_email": reporter_email},
            )

        logger.info("Lesson %s reported by %s", lesson_id, reporter_email)
        return {"success": True}


report_service = ReportService()
