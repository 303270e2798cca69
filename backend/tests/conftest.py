"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock async session (no real DB needed)
    ├── sample_post_payload: Valid request body for create/update
    ├── make_post: Factory for transient Post ORM instances
    ├── db_tables: Creates and drops tables in a throwaway SQLite file
    └── test_client: HTTPX AsyncClient talking to the app over ASGI
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any postboard import: settings are read once at import time
_TEST_DIR = tempfile.mkdtemp(prefix="postboard_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"

from postboard.database import create_tables, dispose_engine, drop_tables  # noqa: E402
from postboard.models.post import Post  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, str(post.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post_payload():
    """A complete, valid post body in the API's camelCase shape."""
    return {
        "author": "John Doe",
        "title": "My First Post",
        "description": "This is a sample post description.",
        "imageUrl": "https://example.com/image.jpg",
    }


@pytest.fixture
def make_post():
    """
    Factory for Post instances that are not attached to any session.

    Real ORM objects are used instead of MagicMock so attribute access
    behaves like a loaded row.
    """
    def _make(**overrides):
        now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        fields = {
            "id": uuid4(),
            "author": "John Doe",
            "title": "My First Post",
            "description": "This is a sample post description.",
            "image_url": "https://example.com/image.jpg",
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Post(**fields)

    return _make


@pytest_asyncio.fixture
async def db_tables():
    """Fresh posts table for each test, dropped afterwards."""
    await create_tables()
    yield
    await drop_tables()
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from postboard.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
