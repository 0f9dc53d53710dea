# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: list the metric catalog in display order."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.enums.financials import MetricSection
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)
from stocktracker_api.domain.services.metric_catalog import sort_catalog


class ListMetricDefinitionsUseCase:
    """Return definitions sorted by section, then order, then name."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, section: MetricSection | None = None) -> list[MetricDefinition]:
        async with self._uow as tx:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            definitions = await with_store_timeout(
                repo.list_all(),
                timeout_s=self._timeout_s,
                operation="metrics.list_all",
            )
        return sort_catalog(definitions, section)
