"""
Digital Life Lessons API — User Route Handlers
================================================

What:  GET /users, GET /users/{email}/status, POST /users.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons.database import get_database
from lifelessons.schemas.common import ErrorResponse
from lifelessons.schemas.user import UserCreate, UserStatusResponse
from lifelessons.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List users, optionally filtered by email",
)
async def list_users(
    email: Optional[str] = Query(default=None),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await user_service.list_users(db, email)


@router.get(
    "/{email}/status",
    response_model=UserStatusResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Premium flag and role for a user",
    description="Unknown users get the defaults: isPremium=false, role='user'.",
)
async def get_user_status(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await user_service.get_user_status(db, email)


@router.post(
    "",
    responses={
        200: {"description": "Insert result, or {message: 'User already exists'}"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a user on first sign-in",
)
async def create_user(
    payload: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await user_service.create_user(db, payload.model_dump(exclude_none=True))
