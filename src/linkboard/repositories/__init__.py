"""Repositories wrapping SQLAlchemy access for each persisted entity."""

from .comment_repo import CommentRepository
from .notification_repo import NotificationRepository
from .post_repo import PostRepository
from .scored_repo import ScoredEntityRepository
from .session_repo import SessionRepository
from .vote_repo import VoteRepository

__all__ = [
    "CommentRepository",
    "NotificationRepository",
    "PostRepository",
    "ScoredEntityRepository",
    "SessionRepository",
    "VoteRepository",
]
