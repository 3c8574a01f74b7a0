"""
Webforge Database Configuration

SQLAlchemy async engine with SQLite for development.
Supports migration to PostgreSQL for production.
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import event
from .config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def configure_sqlite(dbapi_connection, connection_record):
    """Configure SQLite for better concurrency."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")  # Enable WAL for better concurrency
    cursor.execute("PRAGMA busy_timeout=30000")  # 30 second timeout for busy locks
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite engines get the connect pragmas; in-memory SQLite shares one
    connection so every session sees the same database.
    """
    kwargs = {"echo": echo, "future": True}
    is_sqlite = database_url.startswith("sqlite")

    if is_sqlite:
        kwargs["connect_args"] = {
            "timeout": 30,  # Wait up to 30 seconds for locks
            "check_same_thread": False,
        }
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool

    new_engine = create_async_engine(database_url, **kwargs)

    if is_sqlite:
        event.listen(new_engine.sync_engine, "connect", configure_sqlite)

    return new_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory that keeps attributes loaded after commit."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory
async_session = build_session_factory(engine)


async def get_db() -> AsyncSession:
    """Dependency to get database session."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transaction(db: AsyncSession, operation: str):
    """
    Run a multi-statement handler as one unit of work.

    Commits on success. On any error the session is rolled back and the
    error re-raised; storage errors are logged first.
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"{operation} failed: {e}")
        raise
    except Exception:
        await db.rollback()
        raise


async def init_db() -> None:
    """Initialize database tables."""
    # Register all models on Base.metadata before create_all
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
