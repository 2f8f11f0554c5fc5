#!/usr/bin/env python3
"""
Backend server runner script.

This script starts the FastAPI server with the configured host, port and
reload settings.
"""

import sys
import logging

import uvicorn

from assessment_api.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

def main():
    """Run the backend server."""
    try:
        logger.info(f"Starting server on {settings.HOST}:{settings.PORT} (reload: {settings.RELOAD})")

        uvicorn.run(
            "assessment_api.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=settings.RELOAD,
            log_level="info"
        )

    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
