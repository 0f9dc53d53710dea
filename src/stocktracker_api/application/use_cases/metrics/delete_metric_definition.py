# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: remove a catalog entry. Stored record values are untouched."""

from __future__ import annotations

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    run_in_uow,
    with_store_timeout,
)
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)


class DeleteMetricDefinitionUseCase:
    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, key: str) -> None:
        async def _delete(tx: UnitOfWork) -> None:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            deleted = await with_store_timeout(
                repo.delete(key), timeout_s=self._timeout_s, operation="metrics.delete"
            )
            if not deleted:
                raise NotFoundError(f"Metric '{key}' not found.", details={"key": key})

        await run_in_uow(self._uow, _delete)
