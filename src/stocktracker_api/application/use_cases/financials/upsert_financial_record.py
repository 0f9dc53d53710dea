# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: create or merge one financial record.

Purpose:
    Store the values for one (symbol, period type, period) triple. Existing
    records are only touched when ``overwrite`` is set, in which case the
    incoming keys are merged field by field.

    The first record ever stored for an entity that carries a category
    snapshots the full metric catalog as that category's defaults.

Layer:
    application
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.enums.financials import PeriodType, StandardMetric
from stocktracker_api.domain.exceptions.financials import ValidationError
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
    MetricDefinitionsRepository,
)
from stocktracker_api.domain.services.metric_catalog import sort_catalog
from stocktracker_api.domain.services.period_keys import format_period_label, parse_period_key

logger = logging.getLogger(__name__)


async def is_first_record_for_entity(repo: FinancialRecordsRepository, symbol: str) -> bool:
    """Return True when no record of any period type exists for ``symbol``."""
    return not await repo.exists_for_symbol(symbol)


@dataclass(frozen=True)
class UpsertFinancialRecordRequest:
    """Values to store for one period.

    Attributes:
        symbol: Entity identifier.
        period_type: Cadence of the record.
        period_iso: Canonical ISO key; must match ``period_type``.
        period_label: Human label; derived from the ISO key when empty on create.
        values: Standard and custom metric values.
        overwrite: Merge into an existing record instead of conflicting.
    """

    symbol: str
    period_type: PeriodType
    period_iso: str
    period_label: str = ""
    values: MetricValues = field(default_factory=MetricValues)
    overwrite: bool = False


@dataclass(frozen=True)
class UpsertFinancialRecordResult:
    """Stored record plus what the write did."""

    record: FinancialRecord
    created: bool
    snapshot_category: str | None = None


class UpsertFinancialRecordUseCase:
    """Create or merge a financial record and propagate category defaults."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, req: UpsertFinancialRecordRequest) -> UpsertFinancialRecordResult:
        """Execute the write.

        Raises:
            ValidationError: If the symbol is empty, the ISO key does not
                match the period type or a custom key names a standard metric.
            ConflictError: If the record exists and ``overwrite`` is False.
            UpstreamTimeoutError: If a store round-trip exceeds the timeout.
        """
        symbol = req.symbol.strip()
        if not symbol:
            raise ValidationError("symbol must be a non-empty string.")
        key = parse_period_key(req.period_iso)
        if key.period_type is not req.period_type:
            raise ValidationError(
                "period_iso does not match period_type.",
                details={"period_iso": req.period_iso, "period_type": req.period_type.value},
            )
        shadowed = sorted(k for k in req.values.custom if StandardMetric.from_key(k) is not None)
        if shadowed:
            raise ValidationError(
                "custom keys may not reuse a standard metric key.",
                details={"keys": shadowed},
            )
        label = req.period_label.strip()

        logger.info(
            "financials.upsert.start",
            extra={"symbol": symbol, "period_iso": key.iso_key, "overwrite": req.overwrite},
        )

        async with self._uow as tx:
            records: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
            first = await with_store_timeout(
                is_first_record_for_entity(records, symbol),
                timeout_s=self._timeout_s,
                operation="financials.exists_for_symbol",
            )
            record, created = await with_store_timeout(
                records.upsert(
                    symbol=symbol,
                    period_type=req.period_type,
                    period_iso=key.iso_key,
                    period_label=label,
                    fallback_label=format_period_label(key),
                    values=req.values,
                    overwrite=req.overwrite,
                ),
                timeout_s=self._timeout_s,
                operation="financials.upsert",
            )

            snapshot_category: str | None = None
            if first:
                snapshot_category = await self._snapshot_category_defaults(tx, symbol)

            await tx.commit()

        logger.info(
            "financials.upsert.success",
            extra={
                "symbol": symbol,
                "period_iso": key.iso_key,
                "was_created": created,
                "snapshot_category": snapshot_category,
            },
        )
        return UpsertFinancialRecordResult(
            record=record,
            created=created,
            snapshot_category=snapshot_category,
        )

    async def _snapshot_category_defaults(self, tx: UnitOfWork, symbol: str) -> str | None:
        companies: CompaniesRepository = tx.get_repository(CompaniesRepository)
        company = await with_store_timeout(
            companies.get(symbol),
            timeout_s=self._timeout_s,
            operation="companies.get",
        )
        if company is None or not company.category:
            return None

        definitions: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
        defaults: CategoryDefaultsRepository = tx.get_repository(CategoryDefaultsRepository)
        catalog = sort_catalog(
            await with_store_timeout(
                definitions.list_all(),
                timeout_s=self._timeout_s,
                operation="metrics.list_all",
            )
        )
        await with_store_timeout(
            defaults.save(company.category, catalog),
            timeout_s=self._timeout_s,
            operation="category_defaults.save",
        )
        return company.category
