"""
Common Components

This package contains infrastructure shared across the assessment API:
logging configuration and the application exception hierarchy.
"""

# Initialize logging
from assessment_api.common.logger import app_logger, get_logger

from assessment_api.common.exceptions import (
    BaseError, DatabaseError, ValidationError, NotFoundError, ConflictError
)

__all__ = [
    'app_logger',
    'get_logger',
    'BaseError',
    'DatabaseError',
    'ValidationError',
    'NotFoundError',
    'ConflictError',
]
