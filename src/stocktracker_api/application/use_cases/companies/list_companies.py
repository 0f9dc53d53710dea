# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: search the company registry."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)

MAX_SEARCH_RESULTS = 50


class ListCompaniesUseCase:
    """Case-insensitive substring search on symbol and name, sorted by symbol."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, query: str | None = None) -> list[Company]:
        needle = (query or "").strip() or None
        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            companies = await with_store_timeout(
                repo.search(needle, MAX_SEARCH_RESULTS),
                timeout_s=self._timeout_s,
                operation="companies.search",
            )
        return list(companies)
