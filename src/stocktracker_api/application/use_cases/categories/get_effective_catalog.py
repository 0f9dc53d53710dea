# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: effective metric catalog for one entity.

Purpose:
    An entity that belongs to a category, has no records yet, and whose
    category has saved defaults is shown the category list first (stored
    order) followed by base entries the category does not list. Every other
    entity gets the base catalog.

Layer:
    application
"""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
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
from stocktracker_api.domain.services.metric_catalog import effective_catalog, sort_catalog


class GetEffectiveCatalogUseCase:
    """Resolve the catalog an entity should display."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, symbol: str) -> list[MetricDefinition]:
        async with self._uow as tx:
            definitions: MetricDefinitionsRepository = tx.get_repository(
                MetricDefinitionsRepository
            )
            base = sort_catalog(
                await with_store_timeout(
                    definitions.list_all(),
                    timeout_s=self._timeout_s,
                    operation="metrics.list_all",
                )
            )

            companies: CompaniesRepository = tx.get_repository(CompaniesRepository)
            company = await with_store_timeout(
                companies.get(symbol), timeout_s=self._timeout_s, operation="companies.get"
            )
            if company is None or not company.category:
                return base

            records: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
            if await with_store_timeout(
                records.exists_for_symbol(symbol),
                timeout_s=self._timeout_s,
                operation="financials.exists_for_symbol",
            ):
                return base

            categories: CategoryDefaultsRepository = tx.get_repository(
                CategoryDefaultsRepository
            )
            defaults = await with_store_timeout(
                categories.get(company.category),
                timeout_s=self._timeout_s,
                operation="category_defaults.get",
            )

        if defaults is None or not defaults.metrics:
            return base
        return effective_catalog(base, defaults.metrics)
