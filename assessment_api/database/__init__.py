"""
Database Module

This module provides database configuration and engine management for the
assessment API.
"""

from assessment_api.database.base import Base, ModelBase, metadata

__all__ = ['Base', 'ModelBase', 'metadata']
