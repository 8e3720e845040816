"""
Personal dashboard assembly.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.config import settings
from lepinet.models import ExpertReview, Notification, ObservationRecord, User
from lepinet.services.notifications import NotificationService
from lepinet.services.records import RecordService
from lepinet.services.reviews import ReviewService


@dataclass
class UserDashboard:
    user: User
    records: List[ObservationRecord] = field(default_factory=list)
    reviews: List[Tuple[ExpertReview, Optional[ObservationRecord]]] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)
    unread_notifications: int = 0

    @property
    def is_verified_expert(self) -> bool:
        return self.user.is_verified_expert


async def build_user_dashboard(db: AsyncSession, user: User) -> UserDashboard:
    """Own records, own reviews (verified experts only) and the latest notifications."""
    reviews = []
    if user.is_verified_expert:
        reviews = await ReviewService.list_by_reviewer(db, user.id)

    return UserDashboard(
        user=user,
        records=await RecordService.list_for_uploader(db, user.id),
        reviews=reviews,
        notifications=await NotificationService.list_for_user(
            db, user.id, limit=settings.NOTIFICATION_PREVIEW_LIMIT
        ),
        unread_notifications=await NotificationService.unread_count(db, user.id),
    )
