"""Notifications raised when someone comments on a post or replies to a comment."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from linkboard.core.errors import NotFoundError
from linkboard.models.comment import Comment
from linkboard.models.notification import NOTIFY_COMMENT_REPLY, NOTIFY_POST_COMMENT, Notification
from linkboard.models.post import Post
from linkboard.repositories.notification_repo import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates and reads a user's notification inbox.

    The ``notify_*`` methods only flush; they run inside the caller's
    transaction so a notification never outlives a rolled-back comment.
    Nobody is notified about their own activity.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.notifications = NotificationRepository(db)

    def notify_post_comment(self, post: Post, comment: Comment) -> Notification | None:
        return self._notify(post.author_id, comment, NOTIFY_POST_COMMENT)

    def notify_comment_reply(self, parent: Comment, reply: Comment) -> Notification | None:
        return self._notify(parent.author_id, reply, NOTIFY_COMMENT_REPLY)

    def list_notifications(self, user_id: int, *, unread_only: bool = False) -> list[Notification]:
        return self.notifications.list_for_recipient(user_id, unread_only=unread_only)

    def unread_count(self, user_id: int) -> int:
        return self.notifications.count_unread(user_id)

    def mark_read(self, notification_id: int, user_id: int) -> None:
        """Mark one of the user's notifications as read.

        Raises:
            NotFoundError: The notification does not exist or belongs to someone else.
        """
        if not self.notifications.mark_read(notification_id, user_id):
            self.db.rollback()
            raise NotFoundError("Notification not found")
        self.db.commit()

    def mark_all_read(self, user_id: int) -> int:
        updated = self.notifications.mark_all_read(user_id)
        self.db.commit()
        return updated

    def _notify(self, recipient_id: int, comment: Comment, kind: str) -> Notification | None:
        if recipient_id == comment.author_id:
            return None
        notification = self.notifications.create(
            recipient_id=recipient_id,
            sender_id=comment.author_id,
            kind=kind,
            post_id=comment.post_id,
            comment_id=comment.id,
        )
        logger.debug("Queued %s notification %s for user %s", kind, notification.id, recipient_id)
        return notification
