"""
Digital Life Lessons API — Lesson Route Handlers
==================================================

What:  GET /lessons, POST /lessons, GET /lessons/{id}, PATCH /lessons/{id}/like.
How:   Extracts path/body values, delegates to LessonService, returns JSON.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons.database import get_database
from lifelessons.schemas.common import ErrorResponse, InsertResultResponse
from lifelessons.schemas.lesson import LessonCreate, LikeToggleRequest, LikeToggleResponse
from lifelessons.services.lesson_service import lesson_service

router = APIRouter(prefix="/lessons", tags=["Lessons"])


@router.get(
    "",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all lessons, newest first",
)
async def list_lessons(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await lesson_service.list_lessons(db)


@router.post(
    "",
    response_model=InsertResultResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a lesson",
    description="Stores the lesson with an empty `likes` set and zeroed counters.",
)
async def create_lesson(
    payload: LessonCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await lesson_service.create_lesson(db, payload.model_dump(exclude_none=True))


@router.get(
    "/{lesson_id}",
    responses={
        404: {"description": "Lesson not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a lesson with recommendations",
    description=(
        "Returns the lesson plus a `recommended` array of up to 6 public lessons "
        "sharing its category or emotional tone."
    ),
)
async def get_lesson(
    lesson_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await lesson_service.get_lesson(db, lesson_id)


@router.patch(
    "/{lesson_id}/like",
    response_model=LikeToggleResponse,
    responses={
        404: {"description": "Lesson not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Toggle a user's like on a lesson",
)
async def toggle_like(
    lesson_id: str,
    payload: LikeToggleRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> LikeToggleResponse:
    liked = await lesson_service.toggle_like(db, lesson_id, payload.userId)
    return LikeToggleResponse(liked=liked)
