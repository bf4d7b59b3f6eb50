"""
Digital Life Lessons API — User Schemas
=========================================

Users are created by the frontend right after sign-in. Only `email` is
required; any other profile fields (name, photo URL) are stored as sent.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Body of POST /users. Extra profile fields are kept."""
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., min_length=1, description="Natural key for existence checks")


class UserStatusResponse(BaseModel):
    """Premium/role lookup; defaults apply when the user is unknown."""
    isPremium: bool = Field(default=False)
    role: str = Field(default="user")
