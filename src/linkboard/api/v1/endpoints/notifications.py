# src/linkboard/api/v1/endpoints/notifications.py
"""Notification inbox endpoints for the Linkboard API."""

from fastapi import APIRouter, Query

from linkboard.api.v1.dependencies import CurrentUserDep, NotificationServiceDep
from linkboard.models import Notification
from linkboard.schemas.auth import MessageResponse
from linkboard.schemas.notification import NotificationResponse, UnreadCountResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationResponse])
def list_notifications(
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
    unread_only: bool = Query(False, description="Only return unread notifications"),
) -> list[Notification]:
    """Return the caller's notifications, newest first."""
    return notifications.list_notifications(current_user.id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(current_user: CurrentUserDep, notifications: NotificationServiceDep) -> UnreadCountResponse:
    return UnreadCountResponse(count=notifications.unread_count(current_user.id))


@router.put("/read-all", response_model=MessageResponse)
def mark_all_read(current_user: CurrentUserDep, notifications: NotificationServiceDep) -> MessageResponse:
    updated = notifications.mark_all_read(current_user.id)
    return MessageResponse(message=f"Marked {updated} notification(s) as read")


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_read(
    notification_id: int,
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> MessageResponse:
    notifications.mark_read(notification_id, current_user.id)
    return MessageResponse(message="Notification marked as read")
