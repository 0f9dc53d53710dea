# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: replace a category's catalog snapshot wholesale."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import (
    CategoryMetricDefaults,
    MetricDefinition,
)
from stocktracker_api.domain.exceptions.financials import ValidationError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
)

logger = logging.getLogger(__name__)


class SetCategoryDefaultsUseCase:
    """Overwrite the snapshot for one category; entry order is preserved."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(
        self,
        category: str,
        metrics: Sequence[MetricDefinition],
    ) -> CategoryMetricDefaults:
        """Execute the replace.

        Raises:
            ValidationError: If the category is blank or a key repeats.
        """
        name = category.strip()
        if not name:
            raise ValidationError("category must be a non-empty string.")
        keys = [m.key for m in metrics]
        if len(keys) != len(set(keys)):
            raise ValidationError(
                "Category defaults must not repeat a metric key.",
                details={"category": name},
            )

        async with self._uow as tx:
            repo: CategoryDefaultsRepository = tx.get_repository(CategoryDefaultsRepository)
            saved = await with_store_timeout(
                repo.save(name, list(metrics)),
                timeout_s=self._timeout_s,
                operation="category_defaults.save",
            )
            await tx.commit()

        logger.info(
            "categories.set_defaults.success",
            extra={"category": name, "metrics": len(keys)},
        )
        return saved
