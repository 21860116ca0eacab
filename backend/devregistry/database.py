"""
Developer Registry — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that
       auto-commits on success and auto-rolls-back on error.
Who:   Route handlers receive a session via FastAPI's dependency injection
       and pass it explicitly into the service layer.
When:  Engine is created at module import; sessions are created per-request.

Store handle:
    Services never reach for a global connection. Every service method
    takes the AsyncSession it should use, so tests (and alternative
    deployments) can hand in a session bound to any engine.

SQLite notes:
    SQLite only enforces FOREIGN KEY constraints when the pragma is enabled
    on each connection. `enable_sqlite_foreign_keys()` installs a connect
    listener doing exactly that; it is applied to the application engine
    and reused by the test fixtures.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from devregistry.config import settings

logger = logging.getLogger(__name__)

# Integer primary keys are signed 64-bit in SQLite and PostgreSQL BIGINT
MAX_ROW_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """False for ids the driver cannot bind; no row can have such an id."""
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite DBAPI connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **settings.engine_options())
enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    used by `init_db()` and by Alembic.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (which passes it to a service)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/niveis")
        async def list_levels(db: AsyncSession = Depends(get_db_session)):
            return await level_service.list_levels(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create all tables registered on Base.metadata if they do not exist.

    Called from the application lifespan when AUTO_CREATE_TABLES is set,
    and by the test fixtures against an in-memory engine.
    """
    # Registers the models on Base.metadata before create_all runs
    from devregistry.models import developer, level  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized successfully.")


async def is_database_connected(bind: AsyncEngine = engine) -> bool:
    """Probe the store with SELECT 1. Never raises."""
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database connection error: %s", str(e))
        return False


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (app shutdown)."""
    await engine.dispose()
