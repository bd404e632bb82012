"""
Pydantic schemas for post ratings.

The value range is deliberately not enforced here: ``RatingService``
owns that rule so that direct callers and HTTP callers get the same
``InvalidArgument`` failure.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    """Schema for rating a post."""

    value: int = Field(..., description="Rating from 1 to 5", examples=[4])


class RatingRead(BaseModel):
    """A single rater's current rating of a post."""

    user_id: str
    value: int


class RatingSummary(BaseModel):
    """Aggregate view of a post's ratings.

    ``average`` is ``None`` when the post has not been rated yet.
    """

    post_id: int
    count: int
    average: Optional[float] = None
