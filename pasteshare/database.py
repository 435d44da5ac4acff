"""
PasteShare Backend - Database Session Management
=================================================

What:  Async SQLAlchemy engine construction, session factory, ORM base and
       the FastAPI session dependency.
How:   `create_store_engine()` builds an engine from settings; the app
       factory stores it (and its session factory) on `app.state`.
       `get_db_session` opens one session per request from that factory,
       commits on success and rolls back on error.
Who:   Engine is built by `pasteshare.main.create_app`; sessions are injected
       into route handlers via `Depends(get_db_session)`.
When:  Engine is created once per application; sessions per request.

There is deliberately no module-level engine. Whoever creates the
application owns the engine and disposes it on shutdown.

Connection Pooling:
    pool_size / max_overflow / pre_ping come from settings for server
    databases (PostgreSQL). SQLite URLs get SQLAlchemy's default pool, which
    rejects those arguments.
"""

from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pasteshare.config import settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate.
    """
    pass


# ── Engine / Session Factory ──────────────────────────────────────────────
def create_store_engine(database_url: Optional[str] = None, **engine_kwargs) -> AsyncEngine:
    """
    Build the async engine for the pastes store.

    Args:
        database_url: Overrides settings.database_url (used by tests and Alembic).
        engine_kwargs: Extra keyword arguments passed to create_async_engine.

    Returns:
        A new AsyncEngine. No connection is opened until first use.
    """
    url = database_url or settings.database_url
    options = {
        # Echo SQL only when debugging
        "echo": settings.log_level == "DEBUG",
    }
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    options.update(engine_kwargs)
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the per-request session factory bound to `engine`.

    expire_on_commit=False keeps returned rows readable after commit, since
    responses are serialized after the session has committed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the session factory the app factory put on app.state
        2. Yields a session to the route handler
        3. On success: commits (mutations have already committed in PasteService)
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/pastes/{paste_id}")
        async def get_paste(paste_id: UUID, db: AsyncSession = Depends(get_db_session)):
            return await paste_service.get_paste(db, paste_id)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
