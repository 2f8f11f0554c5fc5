#!/usr/bin/env python3
"""
Database initialization script.

This script creates the assessment tables in the configured database.
Use alembic (``alembic upgrade head``) instead when the schema is managed
through migrations.
"""

import sys
import logging
import asyncio

from assessment_api.config import settings
from assessment_api.database.init_db import initialize_database, close_database

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

async def async_main(database_url: str) -> None:
    """Initialize the database."""
    try:
        await initialize_database(
            database_url=database_url,
            echo=settings.SQL_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            create_schema=True
        )
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        sys.exit(1)
    finally:
        await close_database()

if __name__ == "__main__":
    asyncio.run(async_main(sys.argv[1] if len(sys.argv) > 1 else settings.DATABASE_URL))
