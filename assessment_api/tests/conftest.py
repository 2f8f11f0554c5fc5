"""
Shared fixtures for the assessment API tests.

Every test gets its own SQLite database file, so tests never see each
other's data.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from assessment_api import create_app
from assessment_api.config import Settings
from assessment_api.database.init_db import configure_sqlite, create_tables


@pytest.fixture
def test_db_url(tmp_path):
    """URL of a fresh SQLite database file."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test_assessments.db'}"


@pytest_asyncio.fixture
async def engine(test_db_url):
    """Create the schema on a dedicated engine and dispose of it afterwards."""
    test_engine = create_async_engine(test_db_url, echo=False, poolclass=NullPool)
    configure_sqlite(test_engine)
    await create_tables(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test."""
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings(test_db_url):
    return Settings(
        DATABASE_URL=test_db_url,
        AUTO_DB_INIT=True,
        LOG_LEVEL="WARNING",
        LEGACY_ROUTES_ENABLED=True,
    )


@pytest.fixture
def client(test_settings):
    """Create a test client running the full application lifespan."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def reading_assessment(client):
    """Name of a Reading assessment created through the API."""
    response = client.post("/api/assessment", json={"name": "Reading Test 1", "type": "reading"})
    assert response.status_code == 200
    return "Reading Test 1"


@pytest.fixture
def writing_assessment(client):
    """Name of a Writing assessment created through the API."""
    response = client.post("/api/assessment", json={"name": "Writing Test 1", "type": "Writing"})
    assert response.status_code == 200
    return "Writing Test 1"
