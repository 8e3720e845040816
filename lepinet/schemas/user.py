"""
Pydantic schemas for users, authentication and profiles.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator, model_validator

from lepinet.models import UserRole, VerificationStatus
from lepinet.schemas.base import CamelModel


class SignupRequest(CamelModel):
    """
    Request schema for account creation.
    POST /api/auth/signup
    """

    email: str = Field(..., min_length=3, max_length=255, description="Login email")
    password: str = Field(..., description="Password")
    confirm_password: str = Field(..., description="Password repeated")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must be a valid address")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(CamelModel):
    """POST /api/auth/login"""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserSummary(CamelModel):
    """Public identity shown next to reviews and comments."""

    id: uuid.UUID
    first_name: str
    last_name: str
    profession: Optional[str] = None
    role: UserRole
    verification_status: VerificationStatus


class UserProfile(CamelModel):
    """Full profile, returned to the user themselves and to admins."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    verification_status: VerificationStatus
    mobile: Optional[str] = None
    birthday: Optional[str] = None
    gender: Optional[str] = None
    educational_level: Optional[str] = None
    profession: Optional[str] = None
    experience_years: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class PublicProfile(CamelModel):
    """Profile as seen by other users (no email or phone)."""

    id: uuid.UUID
    first_name: str
    last_name: str
    role: UserRole
    verification_status: VerificationStatus
    profession: Optional[str] = None
    experience_years: Optional[str] = None
    educational_level: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    created_at: datetime


class TokenResponse(CamelModel):
    request_id: str
    access_token: str
    token_type: str = "bearer"
    user: UserProfile


class MeResponse(CamelModel):
    request_id: str
    user: UserProfile


class ProfileResponse(CamelModel):
    request_id: str
    profile: PublicProfile


class ProfileUpdateRequest(CamelModel):
    """
    Self-editable profile fields.
    PATCH /api/users/me
    Only fields present in the body are changed.
    """

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    mobile: Optional[str] = Field(None, max_length=50)
    birthday: Optional[str] = Field(None, max_length=20)
    gender: Optional[str] = Field(None, max_length=30)
    educational_level: Optional[str] = Field(None, max_length=100)
    profession: Optional[str] = Field(None, max_length=255)
    experience_years: Optional[str] = Field(None, max_length=50)
    bio: Optional[str] = None
    linkedin_url: Optional[str] = Field(None, max_length=500)
    profile_photo_url: Optional[str] = Field(None, max_length=1000)


class ExpertApplicationRequest(CamelModel):
    """POST /api/users/me/expert-application"""

    profession: str = Field(..., min_length=1, max_length=255, description="e.g. Entomologist")
    experience_years: str = Field(..., min_length=1, max_length=50, description="e.g. 5 years")
    bio: str = Field(..., min_length=1, description="Background and expertise")
    linkedin_url: Optional[str] = Field(None, max_length=500)


class UserListResponse(CamelModel):
    request_id: str
    total: int
    users: List[UserProfile]


class RoleChangeRequest(CamelModel):
    role: UserRole


class ApplicationDecisionRequest(CamelModel):
    approved: bool


class BanRequest(CamelModel):
    banned: bool
