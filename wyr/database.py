"""
Would You Rather API – Async SQLAlchemy engine, session, and declarative base.

The engine is built once at start-up (see ``wyr.main.lifespan``) and kept on
``app.state``; routes receive a fresh session through ``get_db``.
"""

from __future__ import annotations

import logging

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from wyr.config import Settings
from wyr.errors import StorageUnavailable

logger = logging.getLogger(__name__)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Engine ──
def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by ``settings``."""
    engine_kwargs = {
        "echo": settings.DEBUG,
        "future": True,
        "pool_pre_ping": True,
    }

    if not settings.DATABASE_URL.startswith("sqlite"):
        engine_kwargs["pool_size"] = settings.DB_POOL_SIZE
        engine_kwargs["pool_timeout"] = settings.DB_POOL_TIMEOUT
        engine_kwargs["pool_recycle"] = settings.DB_POOL_RECYCLE

    # If using PostgreSQL behind PgBouncer (transaction mode), disable prepared
    # statement caching because it is not supported there.
    if "postgresql" in settings.DATABASE_URL:
        engine_kwargs["connect_args"] = {"statement_cache_size": 0}

    return create_async_engine(settings.DATABASE_URL, **engine_kwargs)


# ── Session factory ──
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Connect once and create missing tables. Raises StorageUnavailable on failure."""
    # Register models on Base.metadata
    import wyr.models  # noqa: F401

    logger.info("Connecting to database...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database connection failed: {e}")
        raise StorageUnavailable() from e
    logger.info("Database connected")


# ── Dependency for FastAPI routes ──
async def get_db(request: Request) -> AsyncSession:  # type: ignore[misc]
    """Yield an async database session, auto-closed on exit."""
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        logger.error("Database session factory unavailable for request")
        raise StorageUnavailable()

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
