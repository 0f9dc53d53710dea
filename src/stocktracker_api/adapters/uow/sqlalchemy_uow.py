# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Unit of work over one ``AsyncSession``.

Each ``async with`` scope opens a fresh session. Repositories requested via
``get_repository`` share it, so a record upsert, its category snapshot and
the catalog read behind it land in one transaction. Leaving the scope
without :meth:`commit` rolls everything back.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any, Literal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stocktracker_api.adapters.repositories.companies_repository import (
    SqlAlchemyCompaniesRepository,
)
from stocktracker_api.adapters.repositories.financial_records_repository import (
    SqlAlchemyFinancialRecordsRepository,
)
from stocktracker_api.adapters.repositories.metric_definitions_repository import (
    SqlAlchemyCategoryDefaultsRepository,
    SqlAlchemyMetricDefinitionsRepository,
)
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
    MetricDefinitionsRepository,
)

RepoFactory = Callable[[AsyncSession], Any]

DEFAULT_REPO_FACTORIES: Mapping[type[Any], RepoFactory] = {
    FinancialRecordsRepository: SqlAlchemyFinancialRecordsRepository,
    MetricDefinitionsRepository: SqlAlchemyMetricDefinitionsRepository,
    CategoryDefaultsRepository: SqlAlchemyCategoryDefaultsRepository,
    CompaniesRepository: SqlAlchemyCompaniesRepository,
}

_Outcome = Literal["open", "committed", "rolled_back"]


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Usage::

        async with SqlAlchemyUnitOfWork(session_factory=factory) as tx:
            records = tx.get_repository(FinancialRecordsRepository)
            ...
            await tx.commit()

    The instance can be entered again after the previous scope exits, but
    not while one is active.
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        repo_factories: Mapping[type[Any], RepoFactory] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._factories = {**DEFAULT_REPO_FACTORIES, **(repo_factories or {})}
        self._session: AsyncSession | None = None
        self._repos: dict[type[Any], Any] = {}
        self._outcome: _Outcome = "open"

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use 'async with uow:' first.")
        return self._session

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already active; nesting is not supported.")
        self._session = self._session_factory()
        self._outcome = "open"
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            await self.rollback()
        finally:
            session, self._session = self._session, None
            self._repos.clear()
            if session is not None:
                await session.close()

    async def commit(self) -> None:
        """Commit once; later calls in the same scope are no-ops."""
        if self._outcome == "open":
            await self.session.commit()
            self._outcome = "committed"

    async def rollback(self) -> None:
        """Roll back unless the scope already committed or rolled back."""
        if self._session is not None and self._outcome == "open":
            await self._session.rollback()
            self._outcome = "rolled_back"

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the ``repo_type`` implementation bound to the active session.

        Raises:
            RuntimeError: Outside an active scope.
            KeyError: If nothing is registered for ``repo_type``.
        """
        session = self.session
        repo = self._repos.get(repo_type)
        if repo is None:
            if repo_type not in self._factories:
                raise KeyError(f"No repository registered for {repo_type!r}.")
            repo = self._repos[repo_type] = self._factories[repo_type](session)
        return repo
