"""
Assessment API

This module provides the application factory for the assessment content
backend, a FastAPI service managing standardized-test content:

1. Reading and Writing assessments, looked up by case-insensitive name
2. Multiple-choice questions with exactly four options each
3. Reading passages, one per Reading assessment
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assessment_api.config import Settings, settings as default_settings
from assessment_api.common.logger import app_logger, configure_logging
from assessment_api.database.init_db import initialize_database, close_database

# Setup module logger
logger = app_logger.getChild("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI application lifespan context manager.

    Initializes the database engine on startup and disposes of its
    connections on shutdown.
    """
    app_settings: Settings = app.state.settings
    logger.info("Application startup sequence initiated.")
    await initialize_database(
        database_url=app_settings.DATABASE_URL,
        echo=app_settings.SQL_ECHO,
        pool_size=app_settings.DB_POOL_SIZE,
        max_overflow=app_settings.DB_MAX_OVERFLOW,
        pool_timeout=app_settings.DB_POOL_TIMEOUT,
        create_schema=app_settings.AUTO_DB_INIT,
    )
    logger.info("Application startup sequence complete.")

    yield

    logger.info("Application shutdown sequence initiated.")
    await close_database()
    logger.info("Application shutdown sequence complete.")

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        app_settings: Settings to use instead of the environment-derived defaults

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or default_settings

    configure_logging(
        level=app_settings.LOG_LEVEL,
        format_string=app_settings.LOG_FORMAT,
        use_json=app_settings.LOG_JSON,
        log_file=app_settings.LOG_FILE,
    )

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Backend for managing assessments, passages, questions and options",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from assessment_api.api import create_main_router, register_exception_handlers
    from assessment_api.assessments.legacy_controller import LEGACY_PREFIX
    from assessment_api.middleware import LegacyAPITrackingMiddleware

    if app_settings.LEGACY_ROUTES_ENABLED:
        app.add_middleware(
            LegacyAPITrackingMiddleware,
            legacy_prefix=f"{app_settings.API_PREFIX}{LEGACY_PREFIX}/"
        )

    app.include_router(
        create_main_router(include_legacy=app_settings.LEGACY_ROUTES_ENABLED),
        prefix=app_settings.API_PREFIX
    )
    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint."""
        return {"message": "Welcome to the Assessment API"}

    logger.info(f"Application created with {len(app.routes)} routes")
    return app
