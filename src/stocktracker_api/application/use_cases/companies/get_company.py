# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: fetch one company by symbol."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)


class GetCompanyUseCase:
    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, symbol: str) -> Company:
        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            company = await with_store_timeout(
                repo.get(symbol), timeout_s=self._timeout_s, operation="companies.get"
            )
        if company is None:
            raise NotFoundError(f"Company '{symbol}' not found.", details={"symbol": symbol})
        return company
