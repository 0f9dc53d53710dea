# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Shared fixtures.

Every test gets its own SQLite file (aiosqlite) with the full schema; HTTP
tests run the real app over ``httpx.ASGITransport`` with the unit-of-work
dependencies bound to that database.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

# Settings are read when the app module is imported; point them at a throwaway
# database before any project import.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{Path(tempfile.mkdtemp(prefix='stocktracker-')) / 'app.db'}"
)

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from stocktracker_api.adapters.dependencies.market_data import (  # noqa: E402
    get_market_data_gateway,
)
from stocktracker_api.adapters.dependencies.uow import get_uow, get_uow_factory  # noqa: E402
from stocktracker_api.adapters.routers.health_router import get_db_probe  # noqa: E402
from stocktracker_api.adapters.uow.sqlalchemy_uow import SqlAlchemyUnitOfWork  # noqa: E402
from stocktracker_api.application.uow import UnitOfWork, UnitOfWorkFactory  # noqa: E402
from stocktracker_api.config.settings import get_settings  # noqa: E402
from stocktracker_api.infrastructure.database.session import (  # noqa: E402
    build_engine,
    build_sessionmaker,
    create_all,
)
from stocktracker_api.main import create_app  # noqa: E402
from stocktracker_testkit import FakeMarketDataGateway, InMemoryStore  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so env changes made by a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_all(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]) -> UnitOfWorkFactory:
    def _factory() -> UnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory=session_factory)

    return _factory


@pytest.fixture
def market_data_gateway() -> FakeMarketDataGateway:
    return FakeMarketDataGateway()


@pytest.fixture
def app(
    uow_factory: UnitOfWorkFactory,
    market_data_gateway: FakeMarketDataGateway,
) -> FastAPI:
    application = create_app()

    async def _probe_ok() -> None:
        return None

    application.dependency_overrides[get_uow] = uow_factory
    application.dependency_overrides[get_uow_factory] = lambda: uow_factory
    application.dependency_overrides[get_market_data_gateway] = lambda: market_data_gateway
    application.dependency_overrides[get_db_probe] = lambda: _probe_ok
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
