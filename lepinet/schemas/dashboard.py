"""
Pydantic schemas for the dashboards and the route gate.
"""
from typing import Optional, List, Dict

from lepinet.schemas.base import CamelModel
from lepinet.schemas.user import UserProfile
from lepinet.schemas.record import RecordOut
from lepinet.schemas.review import MyReviewItem
from lepinet.schemas.notification import NotificationOut


class DashboardCounts(CamelModel):
    records: int
    reviews: int
    unread_notifications: int


class UserDashboardResponse(CamelModel):
    request_id: str
    profile: UserProfile
    is_verified_expert: bool
    counts: DashboardCounts
    records: List[RecordOut]
    reviews: List[MyReviewItem]
    notifications: List[NotificationOut]


class AdminStatsResponse(CamelModel):
    request_id: str
    total_users: int
    verified_experts: int
    pending_verifications: int
    total_records: int
    reviewed_records: int
    unreviewed_records: int
    review_coverage: float
    health: Dict[str, str]


class RouteAccessResponse(CamelModel):
    request_id: str
    path: str
    allowed: bool
    redirect_to: Optional[str] = None
