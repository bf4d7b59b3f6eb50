"""
Digital Life Lessons API — Shared Response Schemas
====================================================

What:  Small response shapes reused across resources, plus the error and
       health contracts.
Why:   Keeps the OpenAPI docs accurate for endpoints whose bodies are fixed.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Returned by writes that report only completion."""
    success: bool = Field(description="Always true when the write went through")


class MessageResponse(BaseModel):
    """Soft outcome returned with HTTP 200 (e.g. "Already favorited")."""
    message: str


class InsertResultResponse(BaseModel):
    """The raw insert acknowledgement from the store."""
    acknowledged: bool
    insertedId: str = Field(description="Hex ObjectId of the new document")


class DeleteResultResponse(BaseModel):
    """The raw delete acknowledgement from the store."""
    acknowledged: bool
    deletedCount: int = Field(description="0 when nothing matched, otherwise 1")


class ErrorResponse(BaseModel):
    """
    What:  Error body for every 400/404/500 the API returns.
    Fields:
        message: Human-readable description for display to users
        request_id: Correlation ID for tracing this error in server logs
    """
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
