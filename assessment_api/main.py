"""
Main application entry point for the assessment API.

Usage:
    - Direct: python -m assessment_api.main
    - ASGI server: uvicorn assessment_api.main:app
"""

import os

from assessment_api import create_app
from assessment_api.config import settings
from assessment_api.common.logger import app_logger

# Setup module logger
logger = app_logger.getChild("main")

# Create the FastAPI application
app = create_app(settings)

logger.info(f"Environment: {os.environ.get('ENV', 'development')}")

# Entry point for running the application directly
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.HOST}:{settings.PORT} (reload: {settings.RELOAD})")

    uvicorn.run(
        "assessment_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
