"""
Portfolio API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── settings:        Settings pointing at a throwaway SQLite file
    ├── database:        Database on that file, tables created
    ├── app:             create_app(settings, database)
    ├── test_client:     HTTPX AsyncClient talking to the app in-process
    └── insert:          helper inserting documents in a chosen store order

The endpoint tests run against a real aiosqlite-backed engine; ASGITransport
does not run the lifespan, so the injected Database is used as-is.
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any portfolio_api import reads the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./portfolio_test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from portfolio_api.config import Settings, get_settings  # noqa: E402
from portfolio_api.database import Database  # noqa: E402
from portfolio_api.main import create_app  # noqa: E402

BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """get_settings() is cached per process; tests that change env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_project(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
            result = await project_service.get_document(mock_db_session, str(row.id))
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
def settings(tmp_path):
    """Settings for an isolated SQLite store and throwaway static directories."""
    images = tmp_path / "images"
    images.mkdir()
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'portfolio.db'}",
        images_dir=str(images),
        client_build_dir=str(tmp_path / "client_build"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed directly to the ASGI app.

    Usage:
        async def test_articles(test_client):
            response = await test_client.get("/articles")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def insert(database):
    """
    Insert documents with explicit, increasing created_at values.

    Usage:
        articles = await insert(Article, [{"title": "A", "content": "..."}])
    """
    counter = {"n": 0}

    async def _insert(model, rows):
        created = []
        async with database.session_factory() as session:
            for fields in rows:
                counter["n"] += 1
                obj = model(created_at=BASE_TIME + timedelta(seconds=counter["n"]), **fields)
                session.add(obj)
                created.append(obj)
            await session.commit()
        return created

    return _insert


@pytest.fixture
def sample_articles():
    return [
        {"title": "Cats rule", "content": "A short post", "attributes": {"author": "me"}},
        {"title": "Weekend notes", "content": "I like cats", "attributes": {}},
        {"title": "Dogs", "content": "Barking all day", "attributes": {"tags": ["pets"]}},
    ]


@pytest.fixture
def sample_projects():
    return [
        {"attributes": {"title": "Portfolio site", "stack": ["react", "fastapi"]}},
        {"attributes": {"title": "CLI toolkit", "url": "https://example.com"}},
    ]
