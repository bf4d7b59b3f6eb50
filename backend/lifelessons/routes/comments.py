"""
Digital Life Lessons API — Comment Route Handlers
===================================================

What:  GET /comments?lessonId= (newest first) and POST /comments.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons.database import get_database
from lifelessons.schemas.common import ErrorResponse, SuccessResponse
from lifelessons.schemas.engagement import CommentCreate
from lifelessons.services.comment_service import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get(
    "",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List comments, optionally for one lesson",
)
async def list_comments(
    lessonId: Optional[str] = Query(default=None, description="Only comments on this lesson"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await comment_service.list_comments(db, lessonId)


@router.post(
    "",
    response_model=SuccessResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Post a comment on a lesson",
)
async def post_comment(
    payload: CommentCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await comment_service.post_comment(
        db,
        lesson_id=payload.lessonId,
        commenter_email=payload.commenterEmail,
        commenter_name=payload.commenterName,
        comment=payload.comment,
    )
