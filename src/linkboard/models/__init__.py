# src/linkboard/models/__init__.py
"""SQLAlchemy models for the Linkboard application."""

from .comment import TOMBSTONE_CONTENT, Comment
from .notification import NOTIFY_COMMENT_REPLY, NOTIFY_POST_COMMENT, Notification
from .post import Post
from .refresh_session import RefreshSession
from .user import User
from .vote import TargetKind, VoteRecord

__all__ = [
    "Comment", "TOMBSTONE_CONTENT",
    "Notification", "NOTIFY_COMMENT_REPLY", "NOTIFY_POST_COMMENT",
    "Post",
    "RefreshSession",
    "User",
    "TargetKind", "VoteRecord",
]
