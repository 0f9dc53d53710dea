# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Async SQLAlchemy engine/session factory.

This module owns the application-global async SQLAlchemy engine and
``async_sessionmaker``.

Lifecycle:
    * Call ``init_engine_and_sessionmaker(settings)`` at app startup (lifespan).
    * Units of work take sessions from ``get_sessionmaker()``.
    * Call ``dispose_engine()`` during shutdown.

Notes:
    * ``pool_pre_ping=True`` helps surface dead connections before use.
    * SQLite URLs get foreign keys enabled so value rows cascade on delete.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.infrastructure.database.models import Base

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine for ``database_url``."""
    engine = create_async_engine(url=database_url, pool_pre_ping=True, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a non-expiring session factory bound to ``engine``."""
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


def init_engine_and_sessionmaker(settings: Settings) -> None:
    """Initialize the global async engine and sessionmaker (idempotent).

    Raises:
        ValueError: If ``database_url`` is empty.
    """
    global _engine, _sessionmaker

    if not settings.database_url:
        raise ValueError("database_url must be configured")
    if _engine is not None:
        return

    _engine = build_engine(settings.database_url)
    _sessionmaker = build_sessionmaker(_engine)


async def dispose_engine() -> None:
    """Dispose the global engine at application shutdown."""
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the global session factory, initializing it lazily.

    Lifespan-less test transports are supported via lazy init from
    ``get_settings()``.
    """
    if _sessionmaker is None:
        init_engine_and_sessionmaker(get_settings())
    assert _sessionmaker is not None
    return _sessionmaker


async def create_all(engine: AsyncEngine) -> None:
    """Create every table known to ``Base.metadata`` (dev and tests)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_engine() -> AsyncEngine:
    """Return the global engine, initializing it lazily like ``get_sessionmaker``."""
    if _engine is None:
        init_engine_and_sessionmaker(get_settings())
    assert _engine is not None
    return _engine
