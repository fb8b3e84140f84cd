"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from linkboard.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: int) -> Comment | None:
        result = self.session.execute(select(Comment).where(Comment.id == comment_id))
        return result.scalars().first()

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return every comment on a post, deleted ones included, oldest first."""
        result = self.session.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(result.scalars())

    def list_by_author(self, author_id: int, *, offset: int, limit: int) -> list[Comment]:
        """Return the author's live comments, newest first."""
        result = self.session.execute(
            select(Comment)
            .where(Comment.author_id == author_id, Comment.is_deleted.is_(False))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars())

    def count_by_author(self, author_id: int) -> int:
        result = self.session.execute(
            select(func.count())
            .select_from(Comment)
            .where(Comment.author_id == author_id, Comment.is_deleted.is_(False))
        )
        return int(result.scalar_one())

    def count_replies(self, comment_id: int) -> int:
        result = self.session.execute(
            select(func.count()).select_from(Comment).where(Comment.parent_id == comment_id)
        )
        return int(result.scalar_one())

    def create(
        self,
        *,
        post_id: int,
        author_id: int,
        content: str,
        parent_id: int | None = None,
    ) -> Comment:
        comment = Comment(
            post_id=post_id,
            parent_id=parent_id,
            author_id=author_id,
            content=content,
            points=0,
            is_deleted=False,
        )
        self.session.add(comment)
        self.session.flush()
        return comment

    def delete(self, comment: Comment) -> None:
        self.session.delete(comment)
        self.session.flush()
