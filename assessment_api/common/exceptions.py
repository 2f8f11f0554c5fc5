"""
Common Exception Classes

This module defines custom exceptions used throughout the application.
Each exception carries the human-readable message returned to API clients.
"""

from typing import Optional, Any


class BaseError(Exception):
    """Base class for all custom exceptions."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class DatabaseError(BaseError):
    """Exception raised for database-related errors."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(f"Database error: {message}", original_exception)


class ValidationError(BaseError):
    """Exception raised when client input is malformed or breaks a business rule."""

    def __init__(self, message: str, errors: Optional[dict] = None):
        """
        Initialize the validation error.

        Args:
            message: Error message
            errors: Dictionary of validation errors
        """
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(BaseError):
    """Exception raised when a named resource is not found."""

    def __init__(self, resource_type: str, identifier: Any):
        """
        Initialize the not found error.

        Args:
            resource_type: Type of resource that wasn't found
            identifier: Name of the resource that wasn't found
        """
        super().__init__(f"There is no {resource_type} named '{identifier}' (case insensitive).")
        self.resource_type = resource_type
        self.identifier = identifier


class ConflictError(BaseError):
    """Exception raised when attempting to create a duplicate resource."""

    def __init__(self, message: str, resource_type: str, identifier: Any,
                 original_exception: Optional[Exception] = None):
        """
        Initialize the conflict error.

        Args:
            message: Error message
            resource_type: Type of resource that was duplicated
            identifier: The identifier that caused the duplicate
            original_exception: Storage exception, if the conflict came from a constraint
        """
        super().__init__(message, original_exception)
        self.resource_type = resource_type
        self.identifier = identifier
