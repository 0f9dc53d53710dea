# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: drop a category's catalog snapshot."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
)


class DeleteCategoryDefaultsUseCase:
    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, category: str) -> None:
        async with self._uow as tx:
            repo: CategoryDefaultsRepository = tx.get_repository(CategoryDefaultsRepository)
            deleted = await with_store_timeout(
                repo.delete(category),
                timeout_s=self._timeout_s,
                operation="category_defaults.delete",
            )
            if not deleted:
                raise NotFoundError(
                    f"No metric defaults stored for category '{category}'.",
                    details={"category": category},
                )
            await tx.commit()
