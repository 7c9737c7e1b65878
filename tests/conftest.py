"""
DayNotes Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Endpoint tests talk to a real SQLite database (aiosqlite) created in
       a per-test temporary directory and injected into `create_app()`.
       Service-level failure tests use a mocked AsyncSession.

Fixture Hierarchy (all function-scoped):
    ├── database: Database handle on a fresh SQLite file with all tables
    ├── test_client: HTTPX AsyncClient wired to an app using `database`
    ├── make_user: coroutine factory inserting rows into `users`
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    └── unreachable_client: AsyncClient whose database cannot be opened
"""

import os

# Settings are read at import time; point them at SQLite before any
# daynotes import happens.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./daynotes_import.db"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from daynotes.config import Settings
from daynotes.database import Database
from daynotes.models import User
from daynotes.security import hash_password


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on an empty SQLite file with the full schema created."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'daynotes_test.db'}"
    db = Database(url)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app instance over ASGI.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from daynotes.main import create_app

    settings = Settings(database_url=database.url, log_level="WARNING", _env_file=None)
    app = create_app(settings=settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(database):
    """
    Insert a user and return its id.

    `hashed=False` stores the password verbatim, like a legacy row.
    """
    async def _make(username: str, password: str, hashed: bool = True) -> int:
        stored = hash_password(password) if hashed else password
        async with database.session() as session:
            user = User(username=username, password=stored)
            session.add(user)
            await session.flush()
            return user.id

    return _make


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.update_note(mock_db_session, ...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalars = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def unreachable_client(tmp_path):
    """
    Client for an app whose SQLite file sits in a directory that does not
    exist, so every statement fails with OperationalError.
    """
    from daynotes.main import create_app

    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'daynotes.db'}"
    db = Database(url)
    settings = Settings(database_url=url, log_level="WARNING", _env_file=None)
    app = create_app(settings=settings, database=db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    await db.dispose()
