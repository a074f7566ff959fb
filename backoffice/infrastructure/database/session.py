"""Async engine lifecycle and the per-request unit of work."""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from backoffice.core.config import DatabaseSettings, get_settings
from backoffice.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(database: DatabaseSettings, debug: bool) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo or debug}
    for name in ("pool_size", "max_overflow"):
        value = getattr(database, name)
        if value is not None:
            options[name] = value
    return options


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside it."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url, **_engine_options(settings.database, settings.debug)
        )
        if _engine.dialect.name == "sqlite":
            enable_sqlite_savepoints(_engine)
        _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert _session_factory is not None
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine so the next call rebuilds it."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def session_scope(**info: Any) -> AsyncIterator[AsyncSession]:
    """One unit of work: commit on success, roll back on error.

    ``info`` is copied into ``AsyncSession.info`` for code that needs request context.
    """
    async with get_session_factory()() as session:
        session.info.update(info)
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create missing tables; deployed databases are managed by alembic."""
    from backoffice.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
