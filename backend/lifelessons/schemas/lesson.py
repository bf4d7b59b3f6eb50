"""
Digital Life Lessons API — Lesson Schemas
===========================================

What:  Request bodies for lesson creation and like toggling.
Why:   Lesson content is free-form; the API only names the fields the
       recommendation query reads. Counters are server-owned and any values
       sent by the client are overwritten on insert.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LessonCreate(BaseModel):
    """Body of POST /lessons."""
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, description="Used to find recommendations")
    emotionalTone: Optional[str] = Field(default=None, description="Used to find recommendations")
    accessLevel: Optional[str] = Field(
        default=None,
        description="'public' lessons are eligible as recommendations",
    )


class LikeToggleRequest(BaseModel):
    """Body of PATCH /lessons/{id}/like."""
    userId: str = Field(..., min_length=1, description="Identifier added to/removed from `likes`")


class LikeToggleResponse(BaseModel):
    liked: bool = Field(description="Membership after the toggle")
