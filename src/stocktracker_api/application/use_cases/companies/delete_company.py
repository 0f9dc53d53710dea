# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: remove a company from the registry. Financial records are kept."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)


class DeleteCompanyUseCase:
    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, symbol: str) -> None:
        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            deleted = await with_store_timeout(
                repo.delete(symbol), timeout_s=self._timeout_s, operation="companies.delete"
            )
            if not deleted:
                raise NotFoundError(f"Company '{symbol}' not found.", details={"symbol": symbol})
            await tx.commit()
