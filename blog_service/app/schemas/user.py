"""
Pydantic models for user profiles.

A profile is keyed by the caller's principal, so the create payload
carries no identifier.  The username is fixed at creation; only the
bio can be changed afterwards.
"""

from pydantic import BaseModel, Field


class ProfileCreate(BaseModel):
    """Schema for creating the caller's profile."""

    username: str = Field(..., examples=["alice"])
    bio: str = Field("", examples=["Writes about distributed systems."])


class BioUpdate(BaseModel):
    """Schema for replacing the caller's bio."""

    bio: str = Field(..., examples=["Now writing about databases."])


class UserRead(BaseModel):
    """Schema for reading a profile from the API."""

    id: str
    username: str
    bio: str

    model_config = {
        "from_attributes": True,
    }
