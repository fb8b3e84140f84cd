"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comments_router,
    notifications_router,
    posts_router,
    users_router,
    votes_router,
)

__all__ = [
    "auth_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "users_router",
    "votes_router",
]
