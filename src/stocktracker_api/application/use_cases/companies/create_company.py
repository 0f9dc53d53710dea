# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: register a company."""

from __future__ import annotations

import logging

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.exceptions.financials import ConflictError, ValidationError
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)

logger = logging.getLogger(__name__)


class CreateCompanyUseCase:
    """Insert a company; ConflictError on a duplicate symbol."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, company: Company) -> Company:
        if not company.symbol.strip() or not company.name.strip():
            raise ValidationError("Company symbol and name are required.")

        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            if await with_store_timeout(
                repo.get(company.symbol), timeout_s=self._timeout_s, operation="companies.get"
            ):
                raise ConflictError(
                    f"Company '{company.symbol}' already exists.",
                    details={"symbol": company.symbol},
                )
            stored = await with_store_timeout(
                repo.add(company), timeout_s=self._timeout_s, operation="companies.add"
            )
            await tx.commit()

        logger.info("companies.create.success", extra={"symbol": stored.symbol})
        return stored
