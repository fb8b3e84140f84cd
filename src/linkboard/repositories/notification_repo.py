"""Data access helpers for user notifications."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from linkboard.models.notification import Notification

__all__ = ["NotificationRepository"]


class NotificationRepository:
    """Inbox rows addressed to a single recipient."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        recipient_id: int,
        sender_id: int,
        kind: str,
        post_id: int,
        comment_id: int | None,
    ) -> Notification:
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            kind=kind,
            post_id=post_id,
            comment_id=comment_id,
            is_read=False,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def list_for_recipient(self, recipient_id: int, *, unread_only: bool = False) -> list[Notification]:
        """Return a recipient's notifications, newest first."""
        stmt = select(Notification).where(Notification.recipient_id == recipient_id)
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
        return list(self.session.execute(stmt).unique().scalars())

    def count_unread(self, recipient_id: int) -> int:
        result = self.session.execute(
            select(func.count()).select_from(Notification).where(
                Notification.recipient_id == recipient_id,
                Notification.is_read.is_(False),
            )
        )
        return int(result.scalar_one())

    def mark_read(self, notification_id: int, recipient_id: int) -> bool:
        """Flag one notification as read; False unless it belongs to the recipient."""
        result = self.session.execute(
            update(Notification)
            .where(
                Notification.id == notification_id,
                Notification.recipient_id == recipient_id,
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def mark_all_read(self, recipient_id: int) -> int:
        result = self.session.execute(
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def detach_comment(self, comment_id: int) -> None:
        """Clear references to a comment that is about to be removed."""
        self.session.execute(
            update(Notification)
            .where(Notification.comment_id == comment_id)
            .values(comment_id=None)
            .execution_options(synchronize_session=False)
        )
