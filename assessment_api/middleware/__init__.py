"""
Middleware Package

This package contains middleware components for the assessment API.
"""

from assessment_api.middleware.legacy_tracking import LegacyAPITrackingMiddleware

__all__ = ['LegacyAPITrackingMiddleware']
