"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import (
    dispose_engine,
    enable_sqlite_savepoints,
    get_engine,
    get_session,
    get_session_factory,
    init_db,
    session_scope,
)

__all__ = [
    "Base",
    "dispose_engine",
    "enable_sqlite_savepoints",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "session_scope",
]
