"""
Digital Life Lessons API — Favorite, Report and Comment Schemas
=================================================================

All three reference a lesson by its hex id string. The id is opaque here:
nothing checks that the lesson exists.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FavoriteRequest(BaseModel):
    """Body of POST /favorites and DELETE /favorites."""
    lessonId: str = Field(..., min_length=1)
    userEmail: str = Field(..., min_length=1)


class ReportCreate(BaseModel):
    """Body of POST /reports."""
    lessonId: str = Field(..., min_length=1)
    reporterEmail: str = Field(..., min_length=1)
    reason: Optional[str] = None


class CommentCreate(BaseModel):
    """Body of POST /comments."""
    lessonId: str = Field(..., min_length=1)
    commenterEmail: Optional[str] = None
    commenterName: Optional[str] = None
    comment: str = Field(..., min_length=1)
