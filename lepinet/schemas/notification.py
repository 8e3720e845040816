"""
Pydantic schemas for notifications.
"""
import uuid
from typing import List
from datetime import datetime

from lepinet.schemas.base import CamelModel


class NotificationOut(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    title: str
    message: str
    is_read: bool
    created_at: datetime


class NotificationListResponse(CamelModel):
    request_id: str
    unread_count: int
    notifications: List[NotificationOut]


class UnreadCountResponse(CamelModel):
    request_id: str
    unread_count: int
