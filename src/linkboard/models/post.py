# src/linkboard/models/post.py
"""SQLAlchemy model for submitted posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkboard.db.session import Base
from linkboard.db.time import utcnow

POST_KIND_LINK = "link"
POST_KIND_TEXT = "text"


class Post(Base):
    """A link or text submission.

    ``points`` and ``comment_count`` are only ever changed with in-database
    increments, never by assigning a value read earlier.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("kind IN ('link', 'text')", name="ck_post_kind"),
        Index("ix_post_created_at", "created_at"),
        Index("ix_post_points", "points"),
        # Ids are never reused, so stale votes cannot attach to a new post.
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    # Exactly one of url/text is set; kind records which.
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    kind: Mapped[str] = mapped_column(String(8), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
