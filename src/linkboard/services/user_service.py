"""Read-only helpers for public user profiles."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from linkboard.core.errors import NotFoundError, ValidationError
from linkboard.models.comment import Comment
from linkboard.models.post import Post
from linkboard.models.user import User
from linkboard.repositories.comment_repo import CommentRepository
from linkboard.repositories.post_repo import PostRepository

__all__ = [
    "UserProfile",
    "get_user_by_username",
    "get_profile",
]

PROFILE_MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class UserProfile:
    """A user plus one page each of their posts and live comments.

    ``pages`` covers whichever of the two lists is longer.
    """

    user: User
    posts: list[Post]
    comments: list[Comment]
    total_posts: int
    total_comments: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        longest = max(self.total_posts, self.total_comments)
        return (longest + self.limit - 1) // self.limit


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return a user by exact username."""
    return db.execute(select(User).where(User.username == username)).scalars().first()


def get_profile(db: Session, username: str, *, page: int = 1, limit: int = 20) -> UserProfile:
    """Return a user's public profile page.

    Raises:
        ValidationError: If ``page`` or ``limit`` is out of range.
        NotFoundError: If no user has that username.
    """
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if not 1 <= limit <= PROFILE_MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {PROFILE_MAX_PAGE_SIZE}")

    user = get_user_by_username(db, username)
    if user is None:
        raise NotFoundError("User not found")

    offset = (page - 1) * limit
    posts = PostRepository(db)
    comments = CommentRepository(db)
    return UserProfile(
        user=user,
        posts=posts.list_by_author(user.id, offset=offset, limit=limit),
        comments=comments.list_by_author(user.id, offset=offset, limit=limit),
        total_posts=posts.count_by_author(user.id),
        total_comments=comments.count_by_author(user.id),
        page=page,
        limit=limit,
    )
