"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from lepinet.core.config import settings
from lepinet.core.middleware import RequestIdMiddleware, REQUEST_ID_HEADER, get_request_id
from lepinet.core.logging import logger, log_error
from lepinet.core.exceptions import AppException, InternalException
from lepinet.schemas.error import ErrorResponse, ErrorDetail, ErrorCode, ERROR_CODE_TO_HTTP_STATUS
from lepinet.db.database import init_db, close_db

# Import routers
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


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting up {settings.APP_NAME}")

    # Create tables if missing (a managed deployment would run migrations instead)
    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        log_error("Failed to initialize database", e)
        # Requests will answer DB_UNAVAILABLE until the database comes back

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen-science butterfly observations: expert review and training curation",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add middleware
app.add_middleware(RequestIdMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


def _error_response(status_code: int, code: ErrorCode, message: str, details=None) -> JSONResponse:
    error_response = ErrorResponse(
        request_id=get_request_id(),
        error=ErrorDetail(code=code, message=message, details=details or None),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(by_alias=True, exclude_none=True),
    )


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom application exceptions.

    Returns standardized error response with proper HTTP status code.
    """
    logger.warning(
        f"Application exception: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": exc.details,
        },
    )

    status_code = ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _error_response(status_code, exc.error_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors (422).

    Returns standardized error response.
    """
    error_details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
    }

    logger.warning("Validation error", extra={"errors": error_details})

    return _error_response(
        ERROR_CODE_TO_HTTP_STATUS[ErrorCode.INVALID_ARGUMENT],
        ErrorCode.INVALID_ARGUMENT,
        "Request validation failed",
        error_details,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle all uncaught exceptions.

    Returns standardized error response with 500 status.
    """
    logger.error(
        f"Uncaught exception: {str(exc)}",
        extra={"exception_type": type(exc).__name__},
        exc_info=True,
    )

    error = InternalException(details={"error": str(exc)} if settings.DEBUG else None)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, error.error_code, error.message, error.details
    )


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(access.router)
app.include_router(users.router)
app.include_router(species.router)
app.include_router(records.router)
app.include_router(reviews.router)
app.include_router(training.router)
app.include_router(admin.router)
app.include_router(notifications.router)
app.include_router(dashboard.router)
app.include_router(watermark.router)


# Root endpoint
@app.get("/", include_in_schema=False)
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
