"""
Legacy API Usage Tracking Middleware

This module provides middleware for tracking usage of the legacy combined
controller paths to help with planning the eventual migration away from
these endpoints.
"""

import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from assessment_api.common.logger import get_logger

# Setup module logger
logger = get_logger(__name__)

class LegacyAPITrackingMiddleware(BaseHTTPMiddleware):
    """Middleware to track usage of legacy API endpoints."""

    def __init__(self, app: ASGIApp, legacy_prefix: str):
        """
        Args:
            app: The wrapped application
            legacy_prefix: Path prefix of the legacy routes, e.g. "/api/Assessment/"
        """
        super().__init__(app)
        self.legacy_prefix = legacy_prefix

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and track legacy API usage.

        Args:
            request: The incoming request
            call_next: The next middleware/route handler

        Returns:
            The response from the next handler
        """
        path = request.url.path

        # Only track legacy API endpoints
        if not path.startswith(self.legacy_prefix):
            return await call_next(request)

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"
        user_agent = request.headers.get("user-agent", "unknown")
        endpoint = f"{request.method} {path[len(self.legacy_prefix):]}"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"LEGACY_API_USAGE: endpoint={endpoint}, error={str(e)}")
            raise

        duration = time.time() - start_time
        logger.info(
            f"LEGACY_API_USAGE: endpoint={endpoint}, status={response.status_code}, "
            f"duration={duration:.3f}s, ip={client_ip}, agent={user_agent}"
        )
        return response
