"""
Personal dashboard API endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.api.deps import get_db, get_current_user
from lepinet.api.reviews import to_my_review_item
from lepinet.core.middleware import get_request_id
from lepinet.models import User
from lepinet.schemas.dashboard import DashboardCounts, UserDashboardResponse
from lepinet.schemas.notification import NotificationOut
from lepinet.schemas.record import RecordOut
from lepinet.schemas.user import UserProfile
from lepinet.services.dashboard import build_user_dashboard


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=UserDashboardResponse)
async def user_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    The caller's profile, uploads, reviews (verified experts only) and
    latest notifications, with counts.
    """
    dashboard = await build_user_dashboard(db, current_user)
    return UserDashboardResponse(
        request_id=get_request_id(),
        profile=UserProfile.model_validate(dashboard.user),
        is_verified_expert=dashboard.is_verified_expert,
        counts=DashboardCounts(
            records=len(dashboard.records),
            reviews=len(dashboard.reviews),
            unread_notifications=dashboard.unread_notifications,
        ),
        records=[RecordOut.model_validate(r) for r in dashboard.records],
        reviews=[to_my_review_item(review, record) for review, record in dashboard.reviews],
        notifications=[NotificationOut.model_validate(n) for n in dashboard.notifications],
    )
