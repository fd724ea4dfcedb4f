"""
Fire Survey Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── survey_db: Empty survey_results table in a temporary SQLite file
    └── test_client: HTTPX AsyncClient talking to the FastAPI app in-process
"""

import os
import tempfile

# Settings are read at import time, so the environment must be in place
# before anything from firesurvey is imported.
_TEST_DIR = tempfile.mkdtemp(prefix="firesurvey_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test_fire.db"
os.environ["GENERATION_URL"] = "http://ollama.test/api/generate"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("EXPORT_PATH", None)
os.environ.pop("EXPORT_FILENAME", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from firesurvey.database import Base, engine, init_database  # noqa: E402
from firesurvey.models.survey import SurveyResult  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_latest(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = "1 Main St"
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_survey():
    """The example submission used across route tests."""
    return {"email": "a@x.com", "address": "1 Main St", "score": 80}


@pytest_asyncio.fixture
async def survey_db():
    """
    Recreates the survey table in the temporary database file.

    Pooled aiosqlite connections are bound to the event loop that opened
    them, so the engine is disposed after every test.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_database()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(survey_db):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan; survey_db performs the same
    database initialization instead.

    Usage:
        async def test_ping(test_client):
            response = await test_client.get("/ping")
            assert response.status_code == 200
    """
    from firesurvey.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
