# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""UnitOfWork dependency wiring.

Purpose:
    Provide SQLAlchemy-backed UnitOfWork instances (and a factory of them)
    for application use cases, backed by the core async_sessionmaker.

Layer:
    adapters/dependencies
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stocktracker_api.adapters.uow.sqlalchemy_uow import SqlAlchemyUnitOfWork
from stocktracker_api.application.uow import UnitOfWork, UnitOfWorkFactory
from stocktracker_api.infrastructure.database.session import get_sessionmaker


def get_uow() -> UnitOfWork:
    """Return a fresh UnitOfWork bound to the global session factory.

    Each call returns a new instance (one per use-case invocation).
    """
    session_factory: async_sessionmaker[AsyncSession] = get_sessionmaker()
    return SqlAlchemyUnitOfWork(session_factory=session_factory)


def get_uow_factory() -> UnitOfWorkFactory:
    """Return a callable producing independent UnitOfWork instances.

    Used by use cases that fan out concurrently and need one session per task.
    """
    session_factory: async_sessionmaker[AsyncSession] = get_sessionmaker()

    def _factory() -> UnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory=session_factory)

    return _factory
