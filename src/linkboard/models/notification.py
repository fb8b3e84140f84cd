# src/linkboard/models/notification.py
"""SQLAlchemy model for reply and comment notifications."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkboard.db.session import Base
from linkboard.db.time import utcnow

if TYPE_CHECKING:
    from linkboard.models.comment import Comment
    from linkboard.models.post import Post
    from linkboard.models.user import User

NOTIFY_POST_COMMENT = "post_comment"
NOTIFY_COMMENT_REPLY = "comment_reply"


class Notification(Base):
    """Tells a user that someone commented on their post or replied to them.

    ``comment_id`` is cleared when the triggering comment is removed; the
    notification itself stays.
    """

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint(
            "kind IN ('post_comment', 'comment_reply')",
            name="ck_notification_kind",
        ),
        Index("ix_notification_recipient_unread", "recipient_id", "is_read", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    sender: Mapped["User"] = relationship("User", foreign_keys=[sender_id], lazy="joined")
    post: Mapped["Post"] = relationship("Post", lazy="joined")
    comment: Mapped[Optional["Comment"]] = relationship("Comment", lazy="joined")
