"""
Notification service.
"""
import uuid
from typing import List, Optional

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.logging import logger
from lepinet.core.exceptions import NotFoundException
from lepinet.models import Notification, NotificationType


class NotificationService:
    """Create and manage per-user notifications."""

    @staticmethod
    def notify(
        db: AsyncSession,
        user_id: uuid.UUID,
        type: NotificationType,
        title: str,
        message: str,
    ) -> Notification:
        """
        Queue a notification on the session. The caller commits it together
        with the change that caused it.
        """
        notification = Notification(
            user_id=user_id,
            type=NotificationType(type).value,
            title=title,
            message=message,
        )
        db.add(notification)

        logger.info(
            "Notification queued",
            extra={"user_id": str(user_id), "notification_type": notification.type},
        )
        return notification

    @staticmethod
    async def list_for_user(
        db: AsyncSession,
        user_id: uuid.UUID,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        if limit:
            stmt = stmt.limit(limit)

        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def unread_count(db: AsyncSession, user_id: uuid.UUID) -> int:
        stmt = select(func.count(Notification.id)).where(
            Notification.user_id == user_id, Notification.is_read.is_(False)
        )
        return (await db.execute(stmt)).scalar_one()

    @staticmethod
    async def _get_owned(
        db: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> Notification:
        notification = await db.get(Notification, notification_id)
        # Someone else's notification is reported as missing
        if notification is None or notification.user_id != user_id:
            raise NotFoundException(
                f"Notification not found: {notification_id}",
                details={"notification_id": str(notification_id)},
            )
        return notification

    @staticmethod
    async def mark_read(
        db: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> Notification:
        notification = await NotificationService._get_owned(db, user_id, notification_id)
        notification.is_read = True
        await db.commit()
        return notification

    @staticmethod
    async def mark_all_read(db: AsyncSession, user_id: uuid.UUID) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        result = await db.execute(stmt)
        await db.commit()

        logger.info(
            "Notifications marked read",
            extra={"user_id": str(user_id), "updated": result.rowcount},
        )
        return result.rowcount

    @staticmethod
    async def delete(db: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID) -> None:
        notification = await NotificationService._get_owned(db, user_id, notification_id)
        await db.delete(notification)
        await db.commit()


# Global singleton instance
notification_service = NotificationService()
