"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for a new comment or reply."""

    post_id: int = Field(..., gt=0)
    parent_id: int | None = Field(None, gt=0, description="Comment being replied to")
    content: str = Field(..., min_length=1, max_length=10_000)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=10_000)


class CommentResponse(BaseModel):
    """A single comment; deleted comments carry the tombstone content."""

    id: int
    post_id: int
    parent_id: int | None
    author_id: int
    content: str
    points: int
    created_at: datetime
    edited_at: datetime | None
    is_deleted: bool

    model_config = ConfigDict(from_attributes=True)


class CommentNodeResponse(BaseModel):
    """A comment with its nested replies."""

    comment: CommentResponse
    replies: list[CommentNodeResponse]

    model_config = ConfigDict(from_attributes=True)
