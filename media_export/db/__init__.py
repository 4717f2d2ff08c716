"""Database module for the media export tool."""

from media_export.db.base import Base
from media_export.db.session import (
    create_engine,
    create_session_factory,
    create_tables,
    get_active_database_url,
    sqlite_database_path,
)

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "create_tables",
    "get_active_database_url",
    "sqlite_database_path",
]
