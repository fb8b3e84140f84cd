"""Comment creation, editing, deletion and thread retrieval."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from linkboard.core.errors import ForbiddenError, NotFoundError, ValidationError
from linkboard.db.time import utcnow
from linkboard.models.comment import TOMBSTONE_CONTENT, Comment
from linkboard.models.vote import TargetKind
from linkboard.repositories.comment_repo import CommentRepository
from linkboard.repositories.notification_repo import NotificationRepository
from linkboard.repositories.post_repo import PostRepository
from linkboard.repositories.vote_repo import VoteRepository
from linkboard.services.notification_service import NotificationService
from linkboard.services.threads import CommentNode, build_tree

logger = logging.getLogger(__name__)

CONTENT_MAX_LENGTH = 10_000


def _clean_content(content: str) -> str:
    cleaned = content.strip()
    if not cleaned:
        raise ValidationError("Comment content cannot be empty or only whitespace")
    if len(cleaned) > CONTENT_MAX_LENGTH:
        raise ValidationError(f"Comment content must not exceed {CONTENT_MAX_LENGTH} characters")
    return cleaned


class CommentService:
    """Manages comments on posts.

    A comment with replies is never removed: deleting it replaces the content
    with a tombstone and keeps its id and parent link, so the replies stay in
    the thread. Leaf comments are removed outright together with their votes.
    New comments notify the post author, and replies notify the parent's
    author, in the same transaction as the comment itself.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.comments = CommentRepository(db)
        self.posts = PostRepository(db)
        self.votes = VoteRepository(db)
        self.notifications = NotificationRepository(db)
        self.notifier = NotificationService(db)

    def create_comment(
        self,
        *,
        post_id: int,
        author_id: int,
        content: str,
        parent_id: int | None = None,
    ) -> Comment:
        """Add a top-level comment or a reply.

        Raises:
            ValidationError: Empty/oversized content, or a parent on another post.
            NotFoundError: Missing post or parent comment.
        """
        content = _clean_content(content)
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")

        parent = None
        if parent_id is not None:
            parent = self.comments.get_by_id(parent_id)
            if parent is None:
                raise NotFoundError("Parent comment not found")
            if parent.post_id != post_id:
                raise ValidationError("Parent comment belongs to a different post")

        comment = self.comments.create(
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_id=parent_id,
        )
        if not self.posts.increment_comment_count(post_id, 1):
            self.db.rollback()
            raise NotFoundError("Post not found")
        if parent is None:
            self.notifier.notify_post_comment(post, comment)
        else:
            self.notifier.notify_comment_reply(parent, comment)
        self.db.commit()
        logger.info("User %s added comment %s on post %s", author_id, comment.id, post_id)
        return comment

    def edit_comment(self, comment_id: int, author_id: int, content: str) -> Comment:
        """Replace a comment's content; only its author may do so."""
        content = _clean_content(content)
        comment = self._get_owned(comment_id, author_id, action="edit")
        if comment.is_deleted:
            raise ValidationError("Deleted comments cannot be edited")

        comment.content = content
        comment.edited_at = utcnow()
        self.db.commit()
        return comment

    def delete_comment(self, comment_id: int, author_id: int) -> None:
        """Delete a comment, tombstoning it when it has replies."""
        comment = self._get_owned(comment_id, author_id, action="delete")

        if self.comments.count_replies(comment_id) > 0:
            comment.is_deleted = True
            comment.content = TOMBSTONE_CONTENT
            self.db.commit()
            logger.info("Comment %s tombstoned", comment_id)
            return

        post_id = comment.post_id
        self.votes.delete_for_target(TargetKind.COMMENT, comment_id)
        self.notifications.detach_comment(comment_id)
        self.comments.delete(comment)
        self.posts.increment_comment_count(post_id, -1)
        self.db.commit()
        logger.info("Comment %s removed", comment_id)

    def get_thread(self, post_id: int) -> list[CommentNode[Comment]]:
        """Return the reply forest for a post."""
        if self.posts.get_by_id(post_id) is None:
            raise NotFoundError("Post not found")
        return build_tree(self.comments.list_for_post(post_id))

    def _get_owned(self, comment_id: int, author_id: int, *, action: str) -> Comment:
        comment = self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.author_id != author_id:
            raise ForbiddenError(f"You can only {action} your own comments")
        return comment
