"""
Authentication API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from lepinet.api.deps import get_db, get_current_user
from lepinet.core.middleware import get_request_id
from lepinet.core.exceptions import AppException, DBUnavailableException
from lepinet.core.logging import logger
from lepinet.core.security import create_access_token
from lepinet.models import User
from lepinet.schemas import OkResponse
from lepinet.schemas.user import (
    SignupRequest,
    LoginRequest,
    TokenResponse,
    MeResponse,
    UserProfile,
)
from lepinet.services.users import user_service


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(request_id: str, user: User) -> TokenResponse:
    token = create_access_token({"sub": str(user.id), "role": user.role.value})
    return TokenResponse(
        request_id=request_id,
        access_token=token,
        user=UserProfile.model_validate(user),
    )


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Create an account with role 'user' and sign it in.

    Raises:
        409: Email already registered
        422: Passwords do not match or are too short
        503: Database unavailable
    """
    request_id = get_request_id()

    logger.info("Processing signup request", extra={"request_id": request_id, "email": request.email})

    try:
        user = await user_service.create_user(
            db,
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        return _token_response(request_id, user)

    except AppException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Signup failed: {str(e)}", extra={"request_id": request_id}, exc_info=True)
        raise DBUnavailableException(f"Database operation failed: {str(e)}")


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Exchange email and password for a bearer token.

    Raises:
        401: Invalid email or password
        403: Account is banned
    """
    request_id = get_request_id()

    user = await user_service.authenticate(db, request.email, request.password)

    logger.info("User logged in", extra={"request_id": request_id, "user_id": str(user.id)})
    return _token_response(request_id, user)


@router.post("/logout", response_model=OkResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    logger.info("User logged out", extra={"user_id": str(current_user.id)})
    return OkResponse(request_id=get_request_id(), message="Signed out")


@router.get("/me", response_model=MeResponse)
async def me(current_user: User = Depends(get_current_user)):
    return MeResponse(request_id=get_request_id(), user=UserProfile.model_validate(current_user))
