"""
Notification model - messages addressed to a single user.
"""
import enum
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index

from lepinet.db.database import Base
from lepinet.models.types import new_id, utcnow, uuid_column_type


class NotificationType(str, enum.Enum):
    """Known notification types. Stored as plain strings so new types need no migration."""

    VERIFICATION_STATUS = "verification_status"
    ROLE_CHANGE = "role_change"


class Notification(Base):
    """Notifications table."""

    __tablename__ = "notifications"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    user_id = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_notifications_user_id", "user_id", "created_at"),
        Index("idx_notifications_is_read", "user_id", "is_read"),
    )

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id={self.user_id}, read={self.is_read})>"
