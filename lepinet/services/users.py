"""
User accounts: sign-up, sign-in, profile edits and expert applications.
"""
import uuid
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.config import settings
from lepinet.core.logging import logger, log_warning
from lepinet.core.security import get_password_hash, verify_password
from lepinet.core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidArgumentException,
    NotFoundException,
    UnauthorizedException,
)
from lepinet.models import User, UserRole, VerificationStatus

# Columns that must never be cleared through a profile edit
_REQUIRED_PROFILE_FIELDS = {"first_name", "last_name"}


class UserService:
    """Account operations on the users table."""

    @staticmethod
    async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundException(f"User not found: {user_id}", details={"user_id": str(user_id)})
        return user

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.USER,
        verification_status: VerificationStatus = VerificationStatus.NONE,
    ) -> User:
        """
        Create an account.

        Raises:
            InvalidArgumentException: Password shorter than MIN_PASSWORD_LENGTH
            ConflictException: Email already registered
        """
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise InvalidArgumentException(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long",
                details={"min_length": settings.MIN_PASSWORD_LENGTH},
            )

        email = email.strip().lower()
        if await UserService.get_by_email(db, email) is not None:
            raise ConflictException("Email is already registered", details={"email": email})

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=role,
            verification_status=verification_status,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            await db.rollback()
            raise ConflictException("Email is already registered", details={"email": email})

        await db.commit()

        logger.info("User created", extra={"user_id": str(user.id), "role": user.role.value})
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> User:
        """
        Raises:
            UnauthorizedException: Unknown email or wrong password
            ForbiddenException: Account is banned
        """
        user = await UserService.get_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            log_warning("Failed login attempt", email=email)
            raise UnauthorizedException("Invalid email or password")

        if user.is_banned:
            raise ForbiddenException("Account is banned", details={"user_id": str(user.id)})

        return user

    @staticmethod
    async def update_profile(db: AsyncSession, user: User, changes: Dict[str, Any]) -> User:
        """Apply self-editable profile fields; role and status are never touched here."""
        for field, value in changes.items():
            if value is None and field in _REQUIRED_PROFILE_FIELDS:
                continue
            setattr(user, field, value)

        await db.commit()

        logger.info(
            "Profile updated",
            extra={"user_id": str(user.id), "fields": sorted(changes.keys())},
        )
        return user

    @staticmethod
    async def submit_expert_application(
        db: AsyncSession, user: User, application: Dict[str, Any]
    ) -> User:
        """
        Store the applicant's credentials and queue them for admin review.

        Raises:
            ConflictException: User is already a verified expert
        """
        if user.verification_status == VerificationStatus.VERIFIED:
            raise ConflictException(
                "User is already a verified expert", details={"user_id": str(user.id)}
            )

        for field, value in application.items():
            setattr(user, field, value)
        user.verification_status = VerificationStatus.PENDING

        await db.commit()

        logger.info("Expert application submitted", extra={"user_id": str(user.id)})
        return user


# Global singleton instance
user_service = UserService()
