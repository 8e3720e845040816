"""
Profile API endpoints.
"""
import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.api.deps import get_db, get_current_user
from lepinet.core.middleware import get_request_id
from lepinet.core.logging import logger
from lepinet.models import User
from lepinet.schemas.user import (
    ExpertApplicationRequest,
    MeResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    PublicProfile,
    UserProfile,
)
from lepinet.services.users import user_service


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=MeResponse)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return MeResponse(request_id=get_request_id(), user=UserProfile.model_validate(current_user))


@router.patch("/me", response_model=MeResponse)
async def update_my_profile(
    request: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Edit self-editable profile fields. Fields left out of the body are unchanged.
    """
    changes = request.model_dump(exclude_unset=True)
    user = await user_service.update_profile(db, current_user, changes)
    return MeResponse(request_id=get_request_id(), user=UserProfile.model_validate(user))


@router.post("/me/expert-application", response_model=MeResponse)
async def submit_expert_application(
    request: ExpertApplicationRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Apply to become a verified expert.

    Raises:
        403: Account is banned
        409: Already a verified expert
    """
    request_id = get_request_id()

    logger.info(
        "Processing expert application",
        extra={"request_id": request_id, "user_id": str(current_user.id)},
    )

    user = await user_service.submit_expert_application(db, current_user, request.model_dump())
    return MeResponse(request_id=request_id, user=UserProfile.model_validate(user))


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_public_profile(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Anyone may view a public profile. Email and phone are not included."""
    user = await user_service.get_user(db, user_id)
    return ProfileResponse(request_id=get_request_id(), profile=PublicProfile.model_validate(user))
