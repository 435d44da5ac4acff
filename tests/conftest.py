"""
PasteShare Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_paste_data: Field values for a stored paste
    ├── make_paste: Factory for transient Paste rows
    ├── engine: In-memory SQLite engine with the schema created
    ├── run_in_session: Runs one repository call in its own committed session
    ├── seed_pastes: Inserts rows directly with chosen timestamps
    └── test_client: HTTPX AsyncClient bound to an app using `engine`
"""

import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from pasteshare.database import Base, create_session_factory, create_store_engine  # noqa: E402
from pasteshare.models.paste import Paste  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked Session Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_paste(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = paste
            result = await paste_service.get_paste(mock_db_session, paste_id)
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
def sample_paste_data():
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "title": "Fibonacci",
        "content": "def fib(n):\n    return n if n < 2 else fib(n - 1) + fib(n - 2)",
        "language": "python",
        "is_public": True,
        "user_id": None,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def make_paste(sample_paste_data):
    """Factory for transient Paste instances, overriding any sample field."""
    def _make(**overrides) -> Paste:
        fields = dict(sample_paste_data)
        fields["id"] = uuid4()
        fields.update(overrides)
        return Paste(**fields)
    return _make


# ══════════════════════════════════════════════════════════════════════════
# SQLite-backed Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with the pastes table created.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    test_engine = create_store_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def run_in_session(session_factory):
    """
    Runs `operation(session)` in a fresh session and commits, the way one
    HTTP request would.

    Usage:
        created = await run_in_session(lambda db: paste_service.create_paste(db, data))
    """
    async def _run(operation):
        async with session_factory() as session:
            result = await operation(session)
            await session.commit()
            return result
    return _run


@pytest.fixture
def seed_pastes(session_factory):
    """
    Insert Paste rows directly, bypassing the repository.

    Used where tests need controlled created_at values.
    """
    async def _seed(*pastes: Paste):
        async with session_factory() as session:
            session.add_all(pastes)
            await session.commit()
        return pastes
    return _seed


@pytest_asyncio.fixture
async def test_client(engine):
    """
    HTTPX AsyncClient talking to an app that uses the SQLite `engine`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from pasteshare.main import create_app

    app = create_app(engine=engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
