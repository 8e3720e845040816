"""
Admin API endpoints: users, expert applications and site statistics.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from lepinet.api.deps import get_db, require_admin
from lepinet.core.middleware import get_request_id
from lepinet.core.exceptions import AppException, DBUnavailableException
from lepinet.core.logging import logger
from lepinet.models import User
from lepinet.schemas import OkResponse
from lepinet.schemas.dashboard import AdminStatsResponse
from lepinet.schemas.user import (
    ApplicationDecisionRequest,
    BanRequest,
    MeResponse,
    RoleChangeRequest,
    UserListResponse,
    UserProfile,
)
from lepinet.services.admin import RoleFilter, StatusFilter, admin_service


router = APIRouter(prefix="/api/admin", tags=["admin"])


def _user_response(request_id: str, user: User) -> MeResponse:
    return MeResponse(request_id=request_id, user=UserProfile.model_validate(user))


@router.get("/users", response_model=UserListResponse)
async def list_users(
    search: Optional[str] = Query(None, description="First name, last name or email contains"),
    role: RoleFilter = Query(RoleFilter.ALL),
    status: StatusFilter = Query(StatusFilter.ALL),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users = await admin_service.list_users(
        db, search=search, role=role.as_role(), status=status.as_status()
    )
    return UserListResponse(
        request_id=get_request_id(),
        total=len(users),
        users=[UserProfile.model_validate(u) for u in users],
    )


@router.get("/stats", response_model=AdminStatsResponse)
async def site_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Site totals and health levels.

    health:
    - unreviewedRecords: good < 100, warning < 500, else critical
    - pendingVerifications: good < 5, warning < 20, else critical
    - verifiedExperts: good > 10, warning > 3, else critical
    """
    stats = await admin_service.stats(db)
    return AdminStatsResponse(request_id=get_request_id(), **stats.to_dict())


@router.get("/applications", response_model=UserListResponse)
async def pending_applications(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users = await admin_service.pending_applications(db)
    return UserListResponse(
        request_id=get_request_id(),
        total=len(users),
        users=[UserProfile.model_validate(u) for u in users],
    )


@router.post("/applications/{user_id}", response_model=MeResponse)
async def decide_application(
    user_id: uuid.UUID,
    request: ApplicationDecisionRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Approve (verified) or reject (rejected) an expert application.
    The applicant receives a verification_status notification.

    Raises:
        404: User not found
        503: Database unavailable
    """
    request_id = get_request_id()

    logger.info(
        "Processing expert application decision",
        extra={
            "request_id": request_id,
            "user_id": str(user_id),
            "approved": request.approved,
            "admin_id": str(admin.id),
        },
    )

    try:
        user = await admin_service.decide_application(db, admin, user_id, request.approved)
        return _user_response(request_id, user)

    except AppException:
        raise
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to decide application: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DBUnavailableException(f"Database operation failed: {str(e)}")


@router.put("/users/{user_id}/role", response_model=MeResponse)
async def change_role(
    user_id: uuid.UUID,
    request: RoleChangeRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Raises:
        404: User not found
        409: Admin demoting themselves
    """
    user = await admin_service.change_role(db, admin, user_id, request.role)
    return _user_response(get_request_id(), user)


@router.put("/users/{user_id}/ban", response_model=MeResponse)
async def set_ban(
    user_id: uuid.UUID,
    request: BanRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Ban (status 'banned') or unban (status 'none') a user."""
    user = await admin_service.set_ban(db, admin, user_id, request.banned)
    return _user_response(get_request_id(), user)


@router.delete("/users/{user_id}", response_model=OkResponse)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Raises:
        404: User not found
        409: Admin deleting themselves
    """
    await admin_service.delete_user(db, admin, user_id)
    return OkResponse(request_id=get_request_id(), message="User deleted")
