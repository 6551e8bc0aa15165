"""
Database connection management
"""

import os
import threading

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

# Global shared connection pool
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_initialized = False
_init_lock = threading.Lock()  # Protect initialization from race conditions


def get_database_url() -> str:
    """Get database URL, checking environment variables first for test compatibility."""
    return os.getenv("MOVIEGRAPH_DATABASE_URL") or settings.database_url


def to_async_url(db_url: str) -> str:
    """Select an async driver for the given database URL."""
    if db_url.startswith("postgresql://"):
        return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if db_url.startswith("sqlite://"):
        return db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return db_url


async def dispose_database() -> None:
    """Close pooled connections and forget the engine; the next use re-initializes."""
    global _async_engine, _async_session_local, _initialized
    engine = _async_engine
    _async_engine = None
    _async_session_local = None
    _initialized = False
    if engine is not None:
        await engine.dispose()
        logger.info("Database connections closed")


async def check_database_connection() -> tuple[bool, str | None]:
    """
    Check that the shared engine can reach the database.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        message = str(e)
        if "Connection refused" in message or "could not connect" in message:
            return False, f"Cannot connect to database server: {message}"
        if "password authentication failed" in message:
            return False, f"Database authentication failed: {message}"
        return False, f"Database connection error ({type(e).__name__}): {message}"
    return True, None


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Initialize the shared async connection pool.

    Thread-safe initialization using a lock to prevent race conditions
    when multiple threads attempt to initialize simultaneously.
    """
    global _async_engine, _async_session_local, _initialized

    if _initialized and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _initialized and not force_reinit and database_url is None:
            return

        db_url = to_async_url(database_url or get_database_url())

        engine_kwargs: dict = {"echo": settings.sql_echo}
        if not db_url.startswith("sqlite"):
            engine_kwargs["pool_size"] = settings.database_pool_size
            engine_kwargs["max_overflow"] = settings.database_max_overflow

        _async_engine = create_async_engine(db_url, **engine_kwargs)
        _async_session_local = async_sessionmaker(
            _async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

        _initialized = True
        logger.info("Database initialized", database_url=_async_engine.url.render_as_string())


def get_async_engine() -> AsyncEngine:
    """Get the shared async SQLAlchemy engine."""
    if _async_engine is None:
        init_database()
    if _async_engine is None:
        raise RuntimeError("Database not initialized")
    return _async_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session factory."""
    if _async_session_local is None:
        init_database()
    if _async_session_local is None:
        raise RuntimeError("Database not initialized")
    return _async_session_local


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all tables directly from the ORM metadata (development and tests)."""
    from ..dbmodels import target_metadata

    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(target_metadata.create_all)
    logger.info("Database tables created")
