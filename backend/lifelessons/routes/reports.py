"""
Digital Life Lessons API — Report Route Handler
=================================================

What:  POST /reports. A second report by the same reporter on the same
       lesson is rejected with 400 "Already reported".
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons.database import get_database
from lifelessons.schemas.common import ErrorResponse, SuccessResponse
from lifelessons.schemas.engagement import ReportCreate
from lifelessons.services.report_service import report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post(
    "",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Already reported", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Report a lesson",
)
async def submit_report(
    payload: ReportCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await report_service.submit_report(
        db, payload.lessonId, payload.reporterEmail, payload.reason
    )
