"""
Digital Life Lessons API — Liveness and Health Routes
=======================================================

What:  GET / (plain-text liveness) and GET /health (store connectivity).
Why:   Load balancers and uptime checks need a cheap endpoint; operators need
       to know whether MongoDB is reachable.

Status levels:
    - healthy:   MongoDB answered a ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from lifelessons import __version__
from lifelessons.database import get_database, ping
from lifelessons.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness text")
async def root() -> str:
    return "Digital Life Lessons server is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> HealthResponse:
    """
    Pings MongoDB and reports aggregate status with uptime.

    The ping is bounded by the client's server-selection timeout, so an
    unreachable deployment answers within a few seconds rather than hanging.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await ping(db)
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
