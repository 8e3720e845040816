"""
Notification API endpoints. Callers only ever see their own notifications.
"""
import enum
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.api.deps import get_db, get_current_user
from lepinet.core.middleware import get_request_id
from lepinet.models import User
from lepinet.schemas import OkResponse
from lepinet.schemas.notification import (
    NotificationListResponse,
    NotificationOut,
    UnreadCountResponse,
)
from lepinet.services.notifications import notification_service


router = APIRouter(prefix="/api/notifications", tags=["notifications"])


class NotificationFilter(str, enum.Enum):
    ALL = "all"
    UNREAD = "unread"


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    filter: NotificationFilter = Query(NotificationFilter.ALL),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Newest first. unreadCount ignores the filter and limit."""
    notifications = await notification_service.list_for_user(
        db,
        current_user.id,
        unread_only=filter == NotificationFilter.UNREAD,
        limit=limit,
    )
    return NotificationListResponse(
        request_id=get_request_id(),
        unread_count=await notification_service.unread_count(db, current_user.id),
        notifications=[NotificationOut.model_validate(n) for n in notifications],
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UnreadCountResponse(
        request_id=get_request_id(),
        unread_count=await notification_service.unread_count(db, current_user.id),
    )


@router.post("/read-all", response_model=OkResponse)
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updated = await notification_service.mark_all_read(db, current_user.id)
    return OkResponse(request_id=get_request_id(), message=f"{updated} marked as read")


@router.post("/{notification_id}/read", response_model=OkResponse)
async def mark_read(
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Raises:
        404: Not found, or not the caller's notification
    """
    await notification_service.mark_read(db, current_user.id, notification_id)
    return OkResponse(request_id=get_request_id())


@router.delete("/{notification_id}", response_model=OkResponse)
async def delete_notification(
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await notification_service.delete(db, current_user.id, notification_id)
    return OkResponse(request_id=get_request_id())
