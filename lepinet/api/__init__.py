"""
API routers package.
"""
from lepinet.api import (
    health,
    auth,
    access,
    users,
    species,
    records,
    reviews,
    training,
    admin,
    notifications,
    dashboard,
    watermark,
)

__all__ = [
    "health",
    "auth",
    "access",
    "users",
    "species",
    "records",
    "reviews",
    "training",
    "admin",
    "notifications",
    "dashboard",
    "watermark",
]
