"""
Pydantic schemas package.
Exports all request/response models.
"""
from lepinet.schemas.base import CamelModel, OkResponse
from lepinet.schemas.error import ErrorCode, ErrorDetail, ErrorResponse, ERROR_CODE_TO_HTTP_STATUS

__all__ = [
    "CamelModel",
    "OkResponse",
    # Error
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "ERROR_CODE_TO_HTTP_STATUS",
]
