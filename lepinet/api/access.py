"""
Route gate API endpoint.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from lepinet.api.deps import get_current_user_optional
from lepinet.core.middleware import get_request_id
from lepinet.models import User
from lepinet.schemas.dashboard import RouteAccessResponse
from lepinet.services.access import normalize_path, resolve_route_access


router = APIRouter(prefix="/api/access", tags=["access"])


@router.get("", response_model=RouteAccessResponse)
async def check_route_access(
    path: str = Query(..., description="Front-end page path, e.g. /admin/dashboard"),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """
    Tell the front end whether the caller may open a page.

    Anonymous callers (no or invalid token) are evaluated as signed out.
    """
    decision = resolve_route_access(path, current_user)
    return RouteAccessResponse(
        request_id=get_request_id(),
        path=normalize_path(path),
        allowed=decision.allowed,
        redirect_to=decision.redirect_to,
    )
