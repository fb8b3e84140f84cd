"""Business logic services for the Linkboard application."""

from .comment_service import CommentService
from .notification_service import NotificationService
from .score_service import ScoreService, VoteOutcome
from .session_service import AuthResult, SessionService, TokenPair
from .threads import CommentNode, Thread, assemble_thread, build_tree
from .tokens import IssuedToken, TokenCodec

__all__ = [
    "AuthResult",
    "CommentNode",
    "CommentService",
    "IssuedToken",
    "NotificationService",
    "ScoreService",
    "SessionService",
    "Thread",
    "TokenCodec",
    "TokenPair",
    "VoteOutcome",
    "assemble_thread",
    "build_tree",
]
