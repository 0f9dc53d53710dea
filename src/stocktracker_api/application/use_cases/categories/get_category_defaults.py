# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: read a category's saved catalog snapshot."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import CategoryMetricDefaults
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
)


class GetCategoryDefaultsUseCase:
    """Return the snapshot or raise NotFoundError."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, category: str) -> CategoryMetricDefaults:
        async with self._uow as tx:
            repo: CategoryDefaultsRepository = tx.get_repository(CategoryDefaultsRepository)
            defaults = await with_store_timeout(
                repo.get(category),
                timeout_s=self._timeout_s,
                operation="category_defaults.get",
            )
        if defaults is None:
            raise NotFoundError(
                f"No metric defaults stored for category '{category}'.",
                details={"category": category},
            )
        return defaults
