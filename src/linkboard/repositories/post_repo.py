"""Data access helpers for working with posts."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session

from linkboard.models.post import Post

__all__ = ["PostRepository"]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filtered(stmt: Select[Any], search: str | None) -> Select[Any]:
    """Restrict ``stmt`` to posts whose title contains ``search``, ignoring case."""
    if search:
        stmt = stmt.where(Post.title.ilike(f"%{_escape_like(search)}%", escape="\\"))
    return stmt


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        result = self.session.execute(select(Post).where(Post.id == post_id))
        return result.scalars().first()

    def list_page(self, *, sort: str, offset: int, limit: int, search: str | None = None) -> list[Post]:
        """Return one page of posts, newest first or highest-scored first."""
        stmt = _filtered(select(Post), search)
        if sort == "top":
            stmt = stmt.order_by(Post.points.desc(), Post.created_at.desc(), Post.id.desc())
        else:
            stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        result = self.session.execute(stmt.offset(offset).limit(limit))
        return list(result.scalars())

    def list_all(self, *, search: str | None = None) -> list[Post]:
        """Return every post matching ``search``, newest first."""
        stmt = _filtered(select(Post), search).order_by(Post.created_at.desc(), Post.id.desc())
        return list(self.session.execute(stmt).scalars())

    def count(self, *, search: str | None = None) -> int:
        """Return the number of posts matching ``search``."""
        stmt = _filtered(select(func.count()).select_from(Post), search)
        return int(self.session.execute(stmt).scalar_one())

    def list_by_author(self, author_id: int, *, offset: int, limit: int) -> list[Post]:
        result = self.session.execute(
            select(Post)
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars())

    def count_by_author(self, author_id: int) -> int:
        result = self.session.execute(
            select(func.count()).select_from(Post).where(Post.author_id == author_id)
        )
        return int(result.scalar_one())

    def create(
        self,
        *,
        author_id: int,
        title: str,
        kind: str,
        url: str | None = None,
        text: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            author_id: Identifier of the submitting user.
            title: Trimmed, validated title.
            kind: ``"link"`` or ``"text"``; matches whichever of url/text is set.
            url: Link target for link posts.
            text: Body for text posts.
        """
        post = Post(
            author_id=author_id,
            title=title,
            kind=kind,
            url=url,
            text=text,
            points=0,
            comment_count=0,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def increment_comment_count(self, post_id: int, delta: int = 1) -> bool:
        """Adjust the comment counter in the database; False if the post is gone."""
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(comment_count=Post.comment_count + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
