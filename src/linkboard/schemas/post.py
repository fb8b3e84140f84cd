"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post. Exactly one of url/text is required."""

    title: str = Field(..., min_length=1, max_length=300, description="Post title")
    url: str | None = Field(None, description="Link target (http or https)")
    text: str | None = Field(None, max_length=10_000, description="Text body")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    url: str | None
    text: str | None
    kind: Literal["link", "text"]
    author_id: int
    points: int
    comment_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostPageResponse(BaseModel):
    """Paginated post listing."""

    items: list[PostResponse]
    total: int
    page: int
    limit: int
    pages: int

    model_config = ConfigDict(from_attributes=True)
