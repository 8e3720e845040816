"""
User model - identities, roles and the expert verification workflow.
"""
import enum
from sqlalchemy import Column, String, Text, DateTime, Index

from lepinet.db.database import Base
from lepinet.models.types import new_id, str_enum, utcnow, uuid_column_type


class UserRole(str, enum.Enum):
    """What a user may do across the site."""

    USER = "user"
    EXPERT = "expert"
    ADMIN = "admin"


class VerificationStatus(str, enum.Enum):
    """A user's standing in the expert-approval workflow."""

    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    BANNED = "banned"


class User(Base):
    """
    Users table.
    Profile fields are edited by the user; role and verification_status only by admins
    (verification_status also moves to 'pending' when the user applies as an expert).
    """

    __tablename__ = "users"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    # Credentials
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Access
    role = Column(str_enum(UserRole, "user_role"), nullable=False, default=UserRole.USER)
    verification_status = Column(
        str_enum(VerificationStatus, "verification_status"),
        nullable=False,
        default=VerificationStatus.NONE,
    )

    # Profile
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    mobile = Column(String(50), nullable=True)
    birthday = Column(String(20), nullable=True)
    gender = Column(String(30), nullable=True)
    educational_level = Column(String(100), nullable=True)
    profession = Column(String(255), nullable=True)
    experience_years = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    profile_photo_url = Column(String(1000), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_role", "role"),
        Index("idx_users_verification_status", "verification_status"),
        Index("idx_users_created_at", "created_at"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_verified_expert(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED

    @property
    def is_banned(self) -> bool:
        return self.verification_status == VerificationStatus.BANNED

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"
