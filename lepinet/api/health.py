"""
Health check endpoint.
"""
from fastapi import APIRouter
from pydantic import BaseModel


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness only; the database is not probed.

    Returns:
        200: Service is healthy
    """
    return HealthResponse(status="ok")
