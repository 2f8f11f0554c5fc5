"""
Central API router and utilities for the assessment API.

This module provides:
- A central router that includes the content routers
- The health endpoint
- Exception handlers that turn application errors into plain-text responses
"""

from typing import Dict

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from assessment_api.assessments.controllers import router as content_router
from assessment_api.assessments.legacy_controller import LEGACY_PREFIX, router as legacy_router
from assessment_api.common.exceptions import (
    ConflictError, DatabaseError, NotFoundError, ValidationError
)
from assessment_api.common.logger import get_logger
from assessment_api.database.init_db import check_connection

# Configure logging
logger = get_logger(__name__)


def create_main_router(include_legacy: bool = True) -> APIRouter:
    """
    Build the router holding every API route.

    Args:
        include_legacy: Whether to mount the legacy combined-controller paths

    Returns:
        Router to be included under the API prefix
    """
    main_router = APIRouter()
    main_router.include_router(health_router)
    main_router.include_router(content_router)
    if include_legacy:
        main_router.include_router(legacy_router, prefix=LEGACY_PREFIX)
        logger.info(f"Registered legacy routes under '{LEGACY_PREFIX}'")
    return main_router


health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health() -> Dict[str, str]:
    """Report service and database availability."""
    database_ok = await check_connection()
    return {"status": "ok", "database": "ok" if database_ok else "unavailable"}


# Exception handlers
async def validation_error_handler(request: Request, exc: ValidationError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


async def conflict_error_handler(request: Request, exc: ConflictError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=status.HTTP_404_NOT_FOUND)


async def database_error_handler(request: Request, exc: DatabaseError) -> PlainTextResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return PlainTextResponse(
        "An unexpected database error occurred.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """
    Handle malformed request bodies and parameters.

    Args:
        request: The incoming request
        exc: The validation exception

    Returns:
        A 400 plain-text response naming each offending field
    """
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", []))
        details.append(f"{location}: {error.get('msg', 'Unknown validation error')}")

    logger.warning(f"Rejected malformed request to {request.url.path}: {details}")
    return PlainTextResponse(
        "Invalid request. " + "; ".join(details),
        status_code=status.HTTP_400_BAD_REQUEST
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the application error handlers on an app."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
