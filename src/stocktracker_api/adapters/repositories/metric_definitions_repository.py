# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric catalog and category defaults repositories (SQLAlchemy)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stocktracker_api.adapters.repositories.base_repository import BaseRepository
from stocktracker_api.domain.entities.metric_definition import (
    CategoryMetricDefaults,
    MetricDefinition,
)
from stocktracker_api.domain.enums.financials import MetricSection
from stocktracker_api.domain.exceptions.financials import NotFoundError
from stocktracker_api.infrastructure.database.models.financials import (
    CategoryMetricDefaultsRow,
    MetricDefinitionRow,
)


class SqlAlchemyMetricDefinitionsRepository(BaseRepository[MetricDefinitionRow]):
    """Base metric catalog backed by ``metric_definitions``."""

    _AREA = "metrics"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session)

    async def list_all(self) -> Sequence[MetricDefinition]:
        async def _run() -> list[MetricDefinition]:
            rows = await self.fetch_all(select(MetricDefinitionRow))
            return [_definition_from_row(r) for r in rows]

        return await self._observed("list_all", _run)

    async def get(self, key: str) -> MetricDefinition | None:
        async def _run() -> MetricDefinition | None:
            row = await self._get_row(key)
            return _definition_from_row(row) if row is not None else None

        return await self._observed("get", _run)

    async def add(self, definition: MetricDefinition) -> MetricDefinition:
        """Insert a new definition; a duplicate key raises ``ConflictError``."""

        async def _run() -> MetricDefinition:
            row = MetricDefinitionRow(
                key=definition.key,
                name=definition.name,
                section=definition.section.value,
                unit=definition.unit,
                order=definition.order,
                is_default=definition.is_default,
                created_by=definition.created_by,
            )
            self._session.add(row)
            await self._flush_or_conflict("Metric key already exists.", key=definition.key)
            return _definition_from_row(row)

        return await self._observed("add", _run)

    async def update(self, definition: MetricDefinition) -> MetricDefinition:
        async def _run() -> MetricDefinition:
            row = await self._get_row(definition.key)
            if row is None:
                raise NotFoundError("Metric definition not found.", details={"key": definition.key})
            row.name = definition.name
            row.section = definition.section.value
            row.unit = definition.unit
            row.order = definition.order
            row.is_default = definition.is_default
            await self._session.flush()
            return _definition_from_row(row)

        return await self._observed("update", _run)

    async def set_order(self, key: str, order: int) -> bool:
        async def _run() -> bool:
            stmt = (
                update(MetricDefinitionRow)
                .where(MetricDefinitionRow.key == key)
                .values(order=order, updated_at=self.utc_now())
                .execution_options(synchronize_session=False)
            )
            res = await self._session.execute(stmt)
            return bool(res.rowcount)

        return await self._observed("set_order", _run)

    async def delete(self, key: str) -> bool:
        async def _run() -> bool:
            stmt = (
                delete(MetricDefinitionRow)
                .where(MetricDefinitionRow.key == key)
                .execution_options(synchronize_session=False)
            )
            res = await self._session.execute(stmt)
            return bool(res.rowcount)

        return await self._observed("delete", _run)

    async def _get_row(self, key: str) -> MetricDefinitionRow | None:
        return await self.fetch_optional(
            select(MetricDefinitionRow).where(MetricDefinitionRow.key == key)
        )


class SqlAlchemyCategoryDefaultsRepository(BaseRepository[CategoryMetricDefaultsRow]):
    """Per-category catalog snapshots stored as JSON arrays."""

    _AREA = "categories"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session)

    async def get(self, category: str) -> CategoryMetricDefaults | None:
        async def _run() -> CategoryMetricDefaults | None:
            row = await self._get_row(category)
            return _defaults_from_row(row) if row is not None else None

        return await self._observed("get", _run)

    async def save(
        self,
        category: str,
        metrics: Sequence[MetricDefinition],
    ) -> CategoryMetricDefaults:
        """Replace the snapshot for ``category`` wholesale."""

        async def _run() -> CategoryMetricDefaults:
            payload = [definition_to_json(d) for d in metrics]
            row = await self._get_row(category)
            if row is None:
                row = CategoryMetricDefaultsRow(category=category, metrics=payload)
                self._session.add(row)
                await self._flush_or_conflict(
                    "Category defaults were created concurrently.", category=category
                )
            else:
                row.metrics = payload
                row.updated_at = self.utc_now()
                await self._session.flush()
            return _defaults_from_row(row)

        return await self._observed("save", _run)

    async def delete(self, category: str) -> bool:
        async def _run() -> bool:
            stmt = (
                delete(CategoryMetricDefaultsRow)
                .where(CategoryMetricDefaultsRow.category == category)
                .execution_options(synchronize_session=False)
            )
            res = await self._session.execute(stmt)
            return bool(res.rowcount)

        return await self._observed("delete", _run)

    async def _get_row(self, category: str) -> CategoryMetricDefaultsRow | None:
        return await self.fetch_optional(
            select(CategoryMetricDefaultsRow).where(CategoryMetricDefaultsRow.category == category)
        )


# ---------------------------------------------------------------------------
# Mapping helpers


def _definition_from_row(row: MetricDefinitionRow) -> MetricDefinition:
    return MetricDefinition(
        key=row.key,
        name=row.name,
        section=MetricSection(row.section),
        unit=row.unit,
        order=row.order,
        is_default=row.is_default,
        created_by=row.created_by,
    )


def definition_to_json(definition: MetricDefinition) -> dict[str, Any]:
    """Serialize a definition for the JSON snapshot column."""
    return {
        "key": definition.key,
        "name": definition.name,
        "section": definition.section.value,
        "unit": definition.unit,
        "order": definition.order,
        "isDefault": definition.is_default,
        "createdBy": definition.created_by,
    }


def definition_from_json(payload: Mapping[str, Any]) -> MetricDefinition:
    """Inverse of :func:`definition_to_json`."""
    return MetricDefinition(
        key=str(payload["key"]),
        name=str(payload.get("name") or payload["key"]),
        section=MetricSection(payload["section"]),
        unit=str(payload.get("unit") or "USD"),
        order=int(payload.get("order") or 0),
        is_default=bool(payload.get("isDefault", False)),
        created_by=payload.get("createdBy"),
    )


def _defaults_from_row(row: CategoryMetricDefaultsRow) -> CategoryMetricDefaults:
    return CategoryMetricDefaults(
        category=row.category,
        metrics=tuple(definition_from_json(m) for m in row.metrics or []),
        updated_at=row.updated_at,
    )
