"""
Admin console operations: user management, expert applications and
site statistics.
"""
import enum
import uuid
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.logging import logger
from lepinet.core.exceptions import ConflictException
from lepinet.models import (
    ExpertReview,
    NotificationType,
    ObservationRecord,
    User,
    UserRole,
    VerificationStatus,
)
from lepinet.services.notifications import NotificationService
from lepinet.services.stats import AdminStats, compute_admin_stats
from lepinet.services.users import UserService


class RoleFilter(str, enum.Enum):
    ALL = "all"
    USER = "user"
    EXPERT = "expert"
    ADMIN = "admin"

    def as_role(self) -> Optional[UserRole]:
        return None if self == RoleFilter.ALL else UserRole(self.value)


class StatusFilter(str, enum.Enum):
    ALL = "all"
    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    BANNED = "banned"

    def as_status(self) -> Optional[VerificationStatus]:
        return None if self == StatusFilter.ALL else VerificationStatus(self.value)


def _refuse_self_action(admin: User, target_id: uuid.UUID, action: str) -> None:
    if admin.id == target_id:
        raise ConflictException(
            f"Admins cannot {action} their own account",
            details={"user_id": str(target_id), "action": action},
        )


class AdminService:
    """Operations available from the admin dashboard."""

    @staticmethod
    async def list_users(
        db: AsyncSession,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        status: Optional[VerificationStatus] = None,
    ) -> List[User]:
        stmt = select(User).order_by(User.created_at.desc())

        term = (search or "").strip()
        if term:
            stmt = stmt.where(
                or_(
                    User.first_name.icontains(term, autoescape=True),
                    User.last_name.icontains(term, autoescape=True),
                    User.email.icontains(term, autoescape=True),
                )
            )
        if role is not None:
            stmt = stmt.where(User.role == UserRole(role))
        if status is not None:
            stmt = stmt.where(User.verification_status == VerificationStatus(status))

        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def pending_applications(db: AsyncSession) -> List[User]:
        return await AdminService.list_users(db, status=VerificationStatus.PENDING)

    @staticmethod
    async def stats(db: AsyncSession) -> AdminStats:
        """Recomputed from the full tables on every call."""
        statuses = (await db.execute(select(User.verification_status))).scalars().all()
        record_ids = (await db.execute(select(ObservationRecord.id))).scalars().all()
        reviewed_ids = (await db.execute(select(ExpertReview.ai_log_id))).scalars().all()
        return compute_admin_stats(statuses, record_ids, reviewed_ids)

    @staticmethod
    async def decide_application(
        db: AsyncSession, admin: User, user_id: uuid.UUID, approved: bool
    ) -> User:
        """
        Approve or reject an expert application and notify the applicant.
        The applicant's current status is not checked.
        """
        user = await UserService.get_user(db, user_id)
        user.verification_status = (
            VerificationStatus.VERIFIED if approved else VerificationStatus.REJECTED
        )

        if approved:
            title = "Verification Approved!"
            message = "Your expert verification has been approved. You can now review records."
        else:
            title = "Verification Rejected"
            message = "Your expert verification request was not approved at this time."
        NotificationService.notify(db, user.id, NotificationType.VERIFICATION_STATUS, title, message)

        await db.commit()

        logger.info(
            "Expert application decided",
            extra={
                "user_id": str(user_id),
                "approved": approved,
                "admin_id": str(admin.id),
            },
        )
        return user

    @staticmethod
    async def change_role(
        db: AsyncSession, admin: User, user_id: uuid.UUID, role: UserRole
    ) -> User:
        """
        Raises:
            ConflictException: An admin tried to demote themselves
        """
        role = UserRole(role)
        if role != UserRole.ADMIN:
            _refuse_self_action(admin, user_id, "demote")

        user = await UserService.get_user(db, user_id)
        user.role = role
        NotificationService.notify(
            db,
            user.id,
            NotificationType.ROLE_CHANGE,
            "Role Updated",
            f"Your role has been changed to {role.value}.",
        )

        await db.commit()

        logger.info(
            "User role changed",
            extra={"user_id": str(user_id), "role": role.value, "admin_id": str(admin.id)},
        )
        return user

    @staticmethod
    async def set_ban(db: AsyncSession, admin: User, user_id: uuid.UUID, banned: bool) -> User:
        """
        Banning overwrites the verification status; unbanning resets it to 'none'.

        Raises:
            ConflictException: An admin tried to ban themselves
        """
        if banned:
            _refuse_self_action(admin, user_id, "ban")

        user = await UserService.get_user(db, user_id)
        user.verification_status = VerificationStatus.BANNED if banned else VerificationStatus.NONE
        await db.commit()

        logger.info(
            "User ban updated",
            extra={"user_id": str(user_id), "banned": banned, "admin_id": str(admin.id)},
        )
        return user

    @staticmethod
    async def delete_user(db: AsyncSession, admin: User, user_id: uuid.UUID) -> None:
        """
        Raises:
            ConflictException: An admin tried to delete themselves
        """
        _refuse_self_action(admin, user_id, "delete")

        user = await UserService.get_user(db, user_id)
        await db.delete(user)
        await db.commit()

        logger.info("User deleted", extra={"user_id": str(user_id), "admin_id": str(admin.id)})


# Global singleton instance
admin_service = AdminService()
