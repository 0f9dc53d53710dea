# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: partially update a company."""

from __future__ import annotations

from dataclasses import dataclass, replace

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


@dataclass(frozen=True)
class UpdateCompanyRequest:
    """Fields left as None are kept. ``category=""`` clears the category."""

    symbol: str
    name: str | None = None
    isin: str | None = None
    category: str | None = None


class UpdateCompanyUseCase:
    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, req: UpdateCompanyRequest) -> Company:
        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            current = await with_store_timeout(
                repo.get(req.symbol), timeout_s=self._timeout_s, operation="companies.get"
            )
            if current is None:
                raise NotFoundError(
                    f"Company '{req.symbol}' not found.", details={"symbol": req.symbol}
                )
            updated = replace(
                current,
                name=req.name if req.name else current.name,
                isin=req.isin if req.isin is not None else current.isin,
                category=req.category.strip() if req.category is not None else current.category,
            )
            stored = await with_store_timeout(
                repo.save(updated), timeout_s=self._timeout_s, operation="companies.save"
            )
            await tx.commit()
        return stored
