"""
Pydantic schemas for blog posts.

Posts are immutable once created.  ``created_at`` is an integer number
of nanoseconds since the Unix epoch.
"""

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for publishing a new post."""

    title: str = Field(..., examples=["Hello, world"])
    content: str = Field(..., examples=["My first post."])


class PostCreated(BaseModel):
    """Identifier allocated to a newly created post."""

    id: int


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: int
    title: str
    content: str
    author_id: str
    created_at: int

    model_config = {
        "from_attributes": True,
    }
