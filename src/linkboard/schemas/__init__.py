"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AuthResponse, LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from .comment import CommentCreate, CommentNodeResponse, CommentResponse, CommentUpdate
from .notification import NotificationResponse, UnreadCountResponse
from .post import PostCreate, PostPageResponse, PostResponse
from .user import PublicUserResponse, UserProfileResponse
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "AuthResponse", "LoginRequest", "RefreshRequest", "RegisterRequest", "TokenResponse",
    "CommentCreate", "CommentNodeResponse", "CommentResponse", "CommentUpdate",
    "NotificationResponse", "UnreadCountResponse",
    "PostCreate", "PostPageResponse", "PostResponse",
    "PublicUserResponse", "UserProfileResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse",
]
