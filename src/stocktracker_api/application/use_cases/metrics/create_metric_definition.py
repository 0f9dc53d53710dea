# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: add a metric definition to the catalog.

Purpose:
    Register a new (usually custom) metric key. The new entry is appended to
    the end of its section: ``order`` is one past the section's current
    maximum, or 0 for an empty section.

Layer:
    application
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.enums.financials import MetricSection
from stocktracker_api.domain.exceptions.financials import ConflictError, ValidationError
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)
from stocktracker_api.domain.services.metric_catalog import next_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateMetricDefinitionRequest:
    """Fields of the new definition; ``unit`` falls back to the configured default."""

    key: str
    name: str
    section: MetricSection
    unit: str | None = None
    is_default: bool = False
    created_by: str | None = None


class CreateMetricDefinitionUseCase:
    """Insert a definition at the end of its section."""

    def __init__(
        self,
        uow: UnitOfWork,
        *,
        default_unit: str = "USD",
        store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
    ) -> None:
        self._uow = uow
        self._default_unit = default_unit
        self._timeout_s = store_timeout_s

    async def execute(self, req: CreateMetricDefinitionRequest) -> MetricDefinition:
        """Execute the insert.

        Raises:
            ValidationError: If key or name is blank.
            ConflictError: If the key already exists.
        """
        key = req.key.strip()
        name = req.name.strip()
        if not key or not name:
            raise ValidationError("Metric key and name are required.")

        async with self._uow as tx:
            repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
            existing = await with_store_timeout(
                repo.get(key), timeout_s=self._timeout_s, operation="metrics.get"
            )
            if existing is not None:
                raise ConflictError(f"Metric '{key}' already exists.", details={"key": key})

            catalog = await with_store_timeout(
                repo.list_all(), timeout_s=self._timeout_s, operation="metrics.list_all"
            )
            definition = MetricDefinition(
                key=key,
                name=name,
                section=req.section,
                unit=(req.unit or "").strip() or self._default_unit,
                order=next_order(catalog, req.section),
                is_default=req.is_default,
                created_by=req.created_by,
            )
            stored = await with_store_timeout(
                repo.add(definition), timeout_s=self._timeout_s, operation="metrics.add"
            )
            await tx.commit()

        logger.info(
            "metrics.create.success",
            extra={"key": stored.key, "section": stored.section.value, "order": stored.order},
        )
        return stored
