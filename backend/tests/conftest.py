"""
Inkwell Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── db_tables: Creates the schema in a throwaway SQLite file, drops it after
    │   ├── session_factory: The application's session factory
    │   ├── db_session: One AsyncSession for service-level tests
    │   ├── make_user / make_category / make_post: Committed seed rows
    │   └── test_client: HTTPX AsyncClient bound to the FastAPI app
    └── auth_headers: Builds a Bearer header for a seeded user
"""

import os
import tempfile
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
# Tests run against a temporary SQLite file, never a real database
_TEST_DB_DIR = tempfile.mkdtemp(prefix="inkwell_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "0"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from app import database
from app.database import Base
from app.models import Category, Post, User
from app.security import create_access_token


@event.listens_for(database.engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE actions and FK checks unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ══════════════════════════════════════════════════════════════════════════
# Mock Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_retry(mock_db_session):
            result = await run_with_retry(mock_db_session, operation, "test")
            mock_db_session.rollback.assert_awaited_once()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_tables():
    """Fresh schema for each test; pooled connections are closed afterwards."""
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections must not outlive this test's event loop
    await database.engine.dispose()


@pytest.fixture
def session_factory(db_tables):
    return database.async_session_factory


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    One session for service-level tests.

    Nothing is committed unless the test commits; pending work is rolled
    back on teardown.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(session_factory):
    """Factory: `await make_user(role="ADMIN")` returns a committed User."""
    counter = {"n": 0}

    async def _make_user(role: str = "USER", email: Optional[str] = None) -> User:
        counter["n"] += 1
        async with session_factory() as session:
            user = User(
                name=f"User {counter['n']}",
                email=email or f"user{counter['n']}@example.com",
                role=role,
            )
            session.add(user)
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def make_category(session_factory):
    """Factory: `await make_category("Travel")` returns a committed Category."""

    async def _make_category(category_name: str = "General") -> Category:
        async with session_factory() as session:
            category = Category(category_name=category_name)
            session.add(category)
            await session.commit()
            return category

    return _make_category


@pytest.fixture
def make_post(session_factory):
    """Factory: `await make_post(owner, title="...")` returns a committed Post."""

    async def _make_post(owner: User, **overrides: Any) -> Post:
        values: Dict[str, Any] = {
            "title": "A day in the hills",
            "content": "We left before sunrise.",
            "featured_image": None,
            "category_id": None,
        }
        values.update(overrides)
        async with session_factory() as session:
            post = Post(user_id=owner.id, **values)
            session.add(post)
            await session.commit()
            return post

    return _make_post


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    How:     Uses ASGITransport to route requests directly to the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """Helper: `auth_headers(user)` is a Bearer header with a fresh token for `user`."""

    def _auth_headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
