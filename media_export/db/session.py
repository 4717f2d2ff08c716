"""
Database session management for async SQLAlchemy.
PostgreSQL is the default, with a SQLite fallback for development.
"""

import logging
import os
from pathlib import Path

from sqlalchemy import event, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from media_export.config import Settings

logger = logging.getLogger(__name__)


def get_active_database_url(settings: Settings) -> str:
    """
    Resolve the database URL to use.

    An explicit DATABASE_URL environment variable always wins. Otherwise the
    SQLite fallback is used when enabled, else the configured default.
    """
    env_database_url = os.environ.get("DATABASE_URL")
    if env_database_url:
        return env_database_url
    if settings.USE_SQLITE_FALLBACK:
        logger.warning(f"[DEV] Using SQLite fallback database: {settings.SQLITE_FALLBACK_URL}")
        return settings.SQLITE_FALLBACK_URL
    return settings.DATABASE_URL


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the asset repository."""
    if "sqlite" in database_url:
        engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

        # SQLite does NOT enforce foreign keys by default.
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def sqlite_database_path(database_url: str) -> Path | None:
    """File backing a SQLite URL, or None for other databases and in-memory SQLite."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables (SQLite development databases only)."""
    from media_export.db.base import Base
    # Import all models to register them
    from media_export.models import Asset, AssetCollection, Resource, Tag  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
