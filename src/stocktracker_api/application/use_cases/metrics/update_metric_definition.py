# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: partially update a metric definition."""

from __future__ import annotations

from dataclasses import dataclass, replace

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.enums.financials import MetricSection
from stocktracker_api.domain.exceptions.financials import NotFoundError, ValidationError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)


@dataclass(frozen=True)
class UpdateMetricDefinitionRequest:
    """Fields left as None are kept."""

    key: str
    name: str | None = None
    section: MetricSection | None = None
    unit: str | None = None
    is_default: bool | None = None


class UpdateMetricDefinitionUseCase:
    """Apply a partial update; the key itself is immutable."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, req: UpdateMetricDefinitionRequest) -> MetricDefinition:
        if req.name is not None and not req.name.strip():
            raise ValidationError("Metric name must not be blank.")

        async with self._uow as tx:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            current = await with_store_timeout(
                repo.get(req.key), timeout_s=self._timeout_s, operation="metrics.get"
            )
            if current is None:
                raise NotFoundError(f"Metric '{req.key}' not found.", details={"key": req.key})

            updated = replace(
                current,
                name=req.name.strip() if req.name is not None else current.name,
                section=req.section or current.section,
                unit=req.unit.strip() if req.unit else current.unit,
                is_default=current.is_default if req.is_default is None else req.is_default,
            )
            stored = await with_store_timeout(
                repo.update(updated), timeout_s=self._timeout_s, operation="metrics.update"
            )
            await tx.commit()
        return stored
