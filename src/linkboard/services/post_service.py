"""Service-level helpers for creating and listing posts."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from linkboard.core.errors import NotFoundError, ValidationError
from linkboard.db.time import utcnow
from linkboard.models.post import POST_KIND_LINK, POST_KIND_TEXT, Post
from linkboard.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 300
TEXT_MAX_LENGTH = 10_000
MAX_PAGE_SIZE = 100
SORT_OPTIONS = ("new", "top", "best")
SEARCH_MAX_LENGTH = 300
# Exponent and age offset of the "best" ranking: points / (hours + 2) ** 1.8.
BEST_GRAVITY = 1.8
BEST_AGE_OFFSET_HOURS = 2

_URL_RE = re.compile(r"^https?://\S+$", re.IGNORECASE)


@dataclass(frozen=True)
class PostPage:
    """One page of posts plus the totals needed for pagination."""

    items: list[Post]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total else 0


def create_post(
    db: Session,
    *,
    author_id: int,
    title: str,
    url: str | None = None,
    text: str | None = None,
) -> Post:
    """Create a link or text post.

    Args:
        db: Database session; committed on success.
        author_id: Identifier of the submitting user.
        title: Post title, trimmed before validation.
        url: Link target; mutually exclusive with ``text``.
        text: Text body; mutually exclusive with ``url``.

    Returns:
        The persisted post.

    Raises:
        ValidationError: If the title is empty or too long, both or neither of
            url/text are given, the url is not http(s), or the text is too long.
    """
    title = title.strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must not exceed {TITLE_MAX_LENGTH} characters")

    url = url.strip() if url else None
    text = text.strip() if text else None
    if url and text:
        raise ValidationError("Post must have either url or text, but not both")
    if not url and not text:
        raise ValidationError("Post must have either url or text")

    if url is not None:
        if not _URL_RE.match(url):
            raise ValidationError("Invalid URL format - must start with http:// or https://")
        kind = POST_KIND_LINK
    else:
        if len(text or "") > TEXT_MAX_LENGTH:
            raise ValidationError(f"Text must not exceed {TEXT_MAX_LENGTH} characters")
        kind = POST_KIND_TEXT

    post = PostRepository(db).create(author_id=author_id, title=title, kind=kind, url=url, text=text)
    db.commit()
    logger.info("User %s created %s post %s", author_id, kind, post.id)
    return post


def get_post(db: Session, post_id: int) -> Post:
    """Return a post or raise NotFoundError."""
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def best_score(points: int, created_at: datetime, now: datetime | None = None) -> float:
    """Rank a post by points decayed with age, so fresh posts can outrank old hits."""
    now = now or utcnow()
    hours = max((now - created_at).total_seconds(), 0.0) / 3600
    return points / (hours + BEST_AGE_OFFSET_HOURS) ** BEST_GRAVITY


def list_posts(
    db: Session,
    *,
    sort: str = "new",
    page: int = 1,
    limit: int = 25,
    search: str | None = None,
) -> PostPage:
    """Return a page of posts sorted by recency, points, or age-decayed points.

    Args:
        db: Database session.
        sort: ``new``, ``top`` or ``best``.
        page: 1-based page number.
        limit: Page size.
        search: Optional case-insensitive substring the title must contain.

    Raises:
        ValidationError: If any argument is out of range.
    """
    if sort not in SORT_OPTIONS:
        raise ValidationError(f"Sort must be one of: {', '.join(SORT_OPTIONS)}")
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    search = search.strip() if search else None
    if search and len(search) > SEARCH_MAX_LENGTH:
        raise ValidationError(f"Search must not exceed {SEARCH_MAX_LENGTH} characters")

    repo = PostRepository(db)
    offset = (page - 1) * limit
    if sort == "best":
        # The score depends on the current time, so ranking happens in memory.
        now = utcnow()
        ranked = sorted(
            repo.list_all(search=search),
            key=lambda post: best_score(post.points, post.created_at, now),
            reverse=True,
        )
        return PostPage(items=ranked[offset:offset + limit], total=len(ranked), page=page, limit=limit)

    items = repo.list_page(sort=sort, offset=offset, limit=limit, search=search)
    return PostPage(items=items, total=repo.count(search=search), page=page, limit=limit)
