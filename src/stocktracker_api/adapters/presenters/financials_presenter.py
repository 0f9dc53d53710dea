# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Financial records and Y/Y series presenter.

Standard and custom maps are flattened into one ``data`` object keyed by the
metric key; decimals become canonical strings and unknown Y/Y stays null.
"""

from __future__ import annotations

from collections.abc import Sequence

from stocktracker_api.adapters.presenters.base_presenter import decimal_to_str
from stocktracker_api.adapters.schemas.http.financials import (
    FinancialRecordHTTP,
    FinancialSeriesHTTP,
    PeriodItemHTTP,
    UpsertFinancialRecordResultHTTP,
)
from stocktracker_api.application.use_cases.financials.upsert_financial_record import (
    UpsertFinancialRecordResult,
)
from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.entities.period_item import PeriodItem
from stocktracker_api.domain.enums.financials import PeriodType


def flatten_values(values: MetricValues) -> dict[str, str]:
    """Flatten the standard/custom pair; writes keep their key sets disjoint."""
    flat = {key: decimal_to_str(v) or "0" for key, v in values.custom.items()}
    flat.update({m.value: decimal_to_str(v) or "0" for m, v in values.standard.items()})
    return flat


def present_period_item(item: PeriodItem) -> PeriodItemHTTP:
    yoy: dict[str, str | None] = {k: decimal_to_str(v) for k, v in item.yoy.custom.items()}
    yoy.update({m.value: decimal_to_str(v) for m, v in item.yoy.standard.items()})
    return PeriodItemHTTP(
        period_iso=item.period_iso,
        label=item.label,
        data=flatten_values(item.data),
        yoy=yoy,
    )


def present_financial_series(
    symbol: str,
    period_type: PeriodType,
    items: Sequence[PeriodItem],
) -> FinancialSeriesHTTP:
    return FinancialSeriesHTTP(
        symbol=symbol,
        period_type=period_type,
        items=[present_period_item(i) for i in items],
    )


def present_financial_record(record: FinancialRecord) -> FinancialRecordHTTP:
    return FinancialRecordHTTP(
        symbol=record.symbol,
        period_type=record.period_type,
        period_iso=record.period_iso,
        period_label=record.period_label,
        data=flatten_values(record.values),
        custom_keys=sorted(record.values.custom),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def present_upsert_result(result: UpsertFinancialRecordResult) -> UpsertFinancialRecordResultHTTP:
    return UpsertFinancialRecordResultHTTP(
        record=present_financial_record(result.record),
        created=result.created,
        snapshot_category=result.snapshot_category,
    )
