"""
Custom middleware for the FastAPI application.
"""
import uuid
import time
from typing import Callable, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from contextvars import ContextVar

from lepinet.core.logging import logger

# Context variable to store request ID across async calls
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Attach a request ID to each request.

    A caller-supplied X-Request-Id is reused so a browser action can be traced
    end to end; otherwise a fresh UUID is generated. The ID is kept in a
    context variable, echoed in the response header and added to every log line.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        request.state.request_id = request_id

        start_time = time.perf_counter()

        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed with exception: {str(e)}",
                extra={"method": request.method, "path": request.url.path},
                exc_info=True,
            )
            raise
        else:
            latency = time.perf_counter() - start_time
            response.headers[REQUEST_ID_HEADER] = request_id

            logger.info(
                "Request completed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "latency_seconds": round(latency, 4),
                },
            )
            return response
        finally:
            request_id_var.reset(token)


def get_request_id() -> str:
    """
    Get the current request ID from context.
    Returns a fresh UUID when called outside a request.
    """
    request_id = request_id_var.get()
    if request_id is None:
        return str(uuid.uuid4())
    return request_id
