from typing import AsyncGenerator, Any, Dict
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from schooldesk.core.config import settings
from schooldesk.models.base import Base


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool settings for server databases; SQLite gets the driver defaults"""
    if make_url(url).get_backend_name() == "sqlite":
        return {"echo": settings.SQL_ECHO}
    return {
        "echo": settings.SQL_ECHO,
        "pool_pre_ping": True,        # Connection health check
        "pool_size": 20,              # Maximum number of connections in the pool
        "max_overflow": 10,           # Connections allowed beyond pool_size
        "pool_timeout": 30,           # Seconds to wait on pool checkout
        "pool_recycle": 1800,         # Recycle connections after 30 minutes
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine; SQLite connections enforce foreign keys"""
    new_engine = create_async_engine(url, **_engine_options(url))
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,    # Don't expire objects after commit
        autoflush=False            # Explicit flush management
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


# FastAPI dependency for database sessions
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async database session.
    Usage: db: AsyncSession = Depends(get_db)
    """
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# Context manager for startup tasks and scripts
@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of request context.
    Usage: async with get_db_context() as session:
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_db(bind: AsyncEngine = None) -> None:
    """Create all tables"""
    # Import models so they register with the metadata
    import schooldesk.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
