"""
Core utilities package.
Exports configuration, logging, middleware, and exceptions.
"""
from lepinet.core.config import settings
from lepinet.core.logging import logger, log_error, log_info, log_warning, log_debug
from lepinet.core.middleware import RequestIdMiddleware, get_request_id
from lepinet.core.exceptions import (
    AppException,
    InvalidArgumentException,
    NotFoundException,
    ConflictException,
    InvalidTransitionException,
    DBUnavailableException,
    UpstreamUnavailableException,
    InternalException,
    UnauthorizedException,
    ForbiddenException,
    PayloadTooLargeException,
)

__all__ = [
    "settings",
    "logger",
    "log_error",
    "log_info",
    "log_warning",
    "log_debug",
    "RequestIdMiddleware",
    "get_request_id",
    "AppException",
    "InvalidArgumentException",
    "NotFoundException",
    "ConflictException",
    "InvalidTransitionException",
    "DBUnavailableException",
    "UpstreamUnavailableException",
    "InternalException",
    "UnauthorizedException",
    "ForbiddenException",
    "PayloadTooLargeException",
]
