"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support (SQLite by default, PostgreSQL via
DATABASE_URL).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import Pool
from backend.app.core.config import settings
from backend.app.core.exceptions import StorageError


def _engine_options(database_url: str) -> dict:
    options = {"echo": settings.db_echo, "future": True}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


# Create async engine
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def storage_errors() -> AsyncIterator[None]:
    """
    Re-raise SQLAlchemy errors from the block as StorageError.

    Wraps reads so that a failing database surfaces as ERR_STORAGE_001
    instead of an unhandled driver exception.
    """
    try:
        yield
    except SQLAlchemyError as e:
        raise StorageError(f"Database error: {e.__class__.__name__}") from e


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of writes as one unit of work.

    Commits when the block exits cleanly. On any error the session is rolled
    back, so none of the block's writes become visible; SQLAlchemy errors are
    re-raised as StorageError, everything else propagates unchanged.

    Usage:
        async with atomic(db):
            db.add(package)
            db.add(entry)
    """
    async with storage_errors():
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
