"""Public user profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from linkboard.schemas.comment import CommentResponse
from linkboard.schemas.post import PostResponse


class PublicUserResponse(BaseModel):
    """Account details visible to anyone; the email address is never exposed."""

    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserProfileResponse(BaseModel):
    """A user with one page of their posts and comments."""

    user: PublicUserResponse
    posts: list[PostResponse]
    comments: list[CommentResponse]
    total_posts: int
    total_comments: int
    page: int
    limit: int
    pages: int

    model_config = ConfigDict(from_attributes=True)
