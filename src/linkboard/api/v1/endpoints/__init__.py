"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "users_router",
    "votes_router",
]
