# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: bulk reorder of catalog entries.

Purpose:
    Apply ``{key, order}`` pairs one by one. Unknown keys are reported back
    instead of failing the batch; entries not mentioned keep their order.

Layer:
    application
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricOrderUpdate, ReorderResult
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)

logger = logging.getLogger(__name__)


class ReorderMetricDefinitionsUseCase:
    """Best-effort reorder; never raises for an unknown key."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, entries: Sequence[MetricOrderUpdate]) -> ReorderResult:
        updated: list[str] = []
        missing: list[str] = []
        async with self._uow as tx:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            for entry in entries:
                found = await with_store_timeout(
                    repo.set_order(entry.key, entry.order),
                    timeout_s=self._timeout_s,
                    operation="metrics.set_order",
                )
                (updated if found else missing).append(entry.key)
            await tx.commit()

        if missing:
            logger.warning("metrics.reorder.missing_keys", extra={"missing": missing})
        return ReorderResult(updated=tuple(updated), missing=tuple(missing))
