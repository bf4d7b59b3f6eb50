"""
Digital Life Lessons API — Favorite Route Handlers
====================================================

What:  POST /favorites and DELETE /favorites. Both take
       {lessonId, userEmail} in the JSON body.

A repeated add answers 200 {"message": "Already favorited"}, not an error.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons.database import get_database
from lifelessons.schemas.common import (
    DeleteResultResponse,
    ErrorResponse,
    MessageResponse,
    SuccessResponse,
)
from lifelessons.schemas.engagement import FavoriteRequest
from lifelessons.services.favorite_service import favorite_service

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.post(
    "",
    responses={
        200: {
            "description": "Favorite recorded, or it already existed",
            "content": {
                "application/json": {
                    "examples": {
                        "added": {"value": SuccessResponse(success=True).model_dump()},
                        "duplicate": {"value": MessageResponse(message="Already favorited").model_dump()},
                    }
                }
            },
        },
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add a lesson to a user's favorites",
)
async def add_favorite(
    payload: FavoriteRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await favorite_service.add_favorite(db, payload.lessonId, payload.userEmail)


@router.delete(
    "",
    response_model=DeleteResultResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Remove a lesson from a user's favorites",
)
async def remove_favorite(
    payload: FavoriteRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await favorite_service.remove_favorite(db, payload.lessonId, payload.userEmail)
