"""
Developer Registry — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh in-memory SQLite database (StaticPool keeps
       the single connection alive for the lifetime of the engine) with
       foreign keys enforced, exactly like the application engine.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        in-memory async engine with tables created
    ├── db_session:       AsyncSession bound to db_engine (service tests)
    ├── mock_db_session:  AsyncMock session for store-failure tests
    ├── sample_developer: valid developer fields
    └── test_client:      HTTPX AsyncClient with get_db_session overridden
"""

import os

# Override settings for testing BEFORE any application import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devregistry.database import enable_sqlite_foreign_keys, get_db_session, init_db


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with the nivel/desenvolvedor schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Session handed directly to service methods.

    Usage:
        async def test_create(db_session):
            level = await level_service.create_level(db_session, "Senior")
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock async session, for simulating store failures.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_developer():
    """Valid developer fields, as the service layer receives them."""
    return {
        "name": "Ana Souza",
        "sex": "F",
        "birth_date": "1990-12-31",
        "hobby": "Xadrez",
    }


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    get_db_session is overridden to use the test engine while keeping the
    commit-on-success / rollback-on-error behavior of the real dependency.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/healthcheck")
            assert response.status_code == 200
    """
    from devregistry.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
