# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Financial records repository (SQLAlchemy)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from stocktracker_api.adapters.repositories.base_repository import BaseRepository
from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.enums.financials import PeriodType, StandardMetric
from stocktracker_api.domain.exceptions.financials import ConflictError, NotFoundError
from stocktracker_api.infrastructure.database.models.financials import (
    FinancialMetricValueRow,
    FinancialRecordRow,
)


class SqlAlchemyFinancialRecordsRepository(BaseRepository[FinancialRecordRow]):
    """SQLAlchemy-backed store for financial records and their metric values."""

    _AREA = "financials"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def find_window(
        self,
        symbol: str,
        period_type: PeriodType,
        limit: int,
    ) -> Sequence[FinancialRecord]:
        """Return up to ``limit`` records, newest first by ISO key."""

        async def _run() -> list[FinancialRecord]:
            stmt: Select[Any] = (
                self._base_stmt(symbol, period_type)
                .order_by(FinancialRecordRow.period_iso.desc())
                .limit(limit)
            )
            return [self._to_domain(row) for row in await self.fetch_all(stmt)]

        return await self._observed("find_window", _run)

    async def find_by_keys(
        self,
        symbol: str,
        period_type: PeriodType,
        iso_keys: Iterable[str],
    ) -> dict[str, FinancialRecord]:
        """Return existing records among ``iso_keys``, keyed by ISO key."""
        keys = sorted(set(iso_keys))
        if not keys:
            return {}

        async def _run() -> dict[str, FinancialRecord]:
            stmt = self._base_stmt(symbol, period_type).where(
                FinancialRecordRow.period_iso.in_(keys)
            )
            rows = await self.fetch_all(stmt)
            return {row.period_iso: self._to_domain(row) for row in rows}

        return await self._observed("find_by_keys", _run)

    async def exists_for_symbol(self, symbol: str) -> bool:
        """Return True if any record exists for ``symbol``."""

        async def _run() -> bool:
            stmt = select(exists().where(FinancialRecordRow.symbol == symbol))
            res = await self._session.execute(stmt)
            return bool(res.scalar())

        return await self._observed("exists_for_symbol", _run)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def upsert(
        self,
        *,
        symbol: str,
        period_type: PeriodType,
        period_iso: str,
        period_label: str,
        values: MetricValues,
        overwrite: bool,
        fallback_label: str = "",
    ) -> tuple[FinancialRecord, bool]:
        """Create the record or merge into the stored one when ``overwrite``."""

        async def _run() -> tuple[FinancialRecord, bool]:
            stmt = self._base_stmt(symbol, period_type).where(
                FinancialRecordRow.period_iso == period_iso
            )
            row = await self.fetch_optional(stmt)
            details = {
                "symbol": symbol,
                "period_type": period_type.value,
                "period_iso": period_iso,
            }

            if row is None:
                row = FinancialRecordRow(
                    symbol=symbol,
                    period_type=period_type.value,
                    period_iso=period_iso,
                    period_label=period_label or fallback_label,
                    values=self._value_rows(values),
                )
                self._session.add(row)
                await self._flush_or_conflict("Financial record already exists.", **details)
                return self._to_domain(row), True

            if not overwrite:
                raise ConflictError(
                    "Financial record already exists; set overwrite to merge.",
                    details=details,
                )

            self._merge_values(row, values)
            if period_label:
                row.period_label = period_label
            row.updated_at = self.utc_now()
            await self._session.flush()
            return self._to_domain(row), False

        return await self._observed("upsert", _run)

    async def delete(self, symbol: str, period_type: PeriodType, period_iso: str) -> None:
        """Delete one record; its value rows cascade."""

        async def _run() -> None:
            stmt = (
                delete(FinancialRecordRow)
                .where(
                    FinancialRecordRow.symbol == symbol,
                    FinancialRecordRow.period_type == period_type.value,
                    FinancialRecordRow.period_iso == period_iso,
                )
                .execution_options(synchronize_session=False)
            )
            res = await self._session.execute(stmt)
            if not res.rowcount:
                raise NotFoundError(
                    "Financial record not found.",
                    details={
                        "symbol": symbol,
                        "period_type": period_type.value,
                        "period_iso": period_iso,
                    },
                )

        await self._observed("delete", _run)

    # ------------------------------------------------------------------
    # Mapping helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _base_stmt(symbol: str, period_type: PeriodType) -> Select[Any]:
        return select(FinancialRecordRow).where(
            FinancialRecordRow.symbol == symbol,
            FinancialRecordRow.period_type == period_type.value,
        )

    @staticmethod
    def _value_rows(values: MetricValues) -> list[FinancialMetricValueRow]:
        rows = [
            FinancialMetricValueRow(is_custom=False, metric_key=metric.value, value=value)
            for metric, value in values.standard.items()
        ]
        rows.extend(
            FinancialMetricValueRow(is_custom=True, metric_key=key, value=value)
            for key, value in values.custom.items()
        )
        return rows

    @classmethod
    def _merge_values(cls, row: FinancialRecordRow, incoming: MetricValues) -> None:
        """Field-level merge: incoming keys replace stored ones, others stay."""
        existing = {(v.is_custom, v.metric_key): v for v in row.values}
        for new in cls._value_rows(incoming):
            current = existing.get((new.is_custom, new.metric_key))
            if current is None:
                row.values.append(new)
            else:
                current.value = new.value

    @staticmethod
    def _to_domain(row: FinancialRecordRow) -> FinancialRecord:
        standard: dict[StandardMetric, Decimal] = {}
        custom: dict[str, Decimal] = {}
        for v in row.values:
            metric = None if v.is_custom else StandardMetric.from_key(v.metric_key)
            if metric is None:
                custom[v.metric_key] = Decimal(v.value)
            else:
                standard[metric] = Decimal(v.value)
        return FinancialRecord(
            symbol=row.symbol,
            period_type=PeriodType(row.period_type),
            period_label=row.period_label,
            period_iso=row.period_iso,
            values=MetricValues(standard=standard, custom=custom),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
