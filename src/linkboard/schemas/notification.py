"""Notification-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class NotificationSender(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class NotificationPost(BaseModel):
    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)


class NotificationComment(BaseModel):
    id: int
    content: str

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    """A notification with enough context to render it without extra lookups.

    ``comment`` is null once the triggering comment has been removed.
    """

    id: int
    kind: Literal["post_comment", "comment_reply"]
    is_read: bool
    created_at: datetime
    sender: NotificationSender
    post: NotificationPost
    comment: NotificationComment | None

    model_config = ConfigDict(from_attributes=True)


class UnreadCountResponse(BaseModel):
    count: int
