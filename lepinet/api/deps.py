"""
API dependencies for dependency injection.
"""
import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.db.database import get_db
from lepinet.core.exceptions import UnauthorizedException, ForbiddenException
from lepinet.core.logging import log_debug
from lepinet.core.security import decode_token
from lepinet.models import User

# Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials], db: AsyncSession
) -> Optional[User]:
    if not credentials:
        return None

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        log_debug("Rejected bearer token")
        return None

    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        return None

    return await db.get(User, user_id)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Current user, or None for anonymous callers and bad tokens."""
    return await _resolve_user(credentials, db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Current user (required).

    Raises:
        UnauthorizedException: No token, invalid/expired token, or unknown user
        ForbiddenException: The account is banned
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    user = await _resolve_user(credentials, db)
    if user is None:
        raise UnauthorizedException("Invalid or expired token")

    if user.is_banned:
        raise ForbiddenException("Account is banned", details={"user_id": str(user.id)})

    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require the admin role."""
    if not current_user.is_admin:
        raise ForbiddenException("Admin access required")
    return current_user


async def require_verified_expert(current_user: User = Depends(get_current_user)) -> User:
    """Require a verified expert (admins always pass)."""
    if not (current_user.is_verified_expert or current_user.is_admin):
        raise ForbiddenException("Verified expert access required")
    return current_user
