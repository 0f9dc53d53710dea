# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: fetch one metric definition by key."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)


class GetMetricDefinitionUseCase:
    """Return a definition or raise NotFoundError."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, key: str) -> MetricDefinition:
        async with self._uow as tx:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            definition = await with_store_timeout(
                repo.get(key),
                timeout_s=self._timeout_s,
                operation="metrics.get",
            )
        if definition is None:
            raise NotFoundError(f"Metric '{key}' not found.", details={"key": key})
        return definition
