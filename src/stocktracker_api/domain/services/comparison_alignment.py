# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Align several per-entity series onto one period axis."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from stocktracker_api.domain.entities.comparison import ComparisonResult, EntitySeries
from stocktracker_api.domain.entities.financial_record import FinancialRecord
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import PeriodParseError
from stocktracker_api.domain.services.period_keys import (
    format_period_label,
    parse_period_key,
    sort_iso_keys,
)


def series_for_metric(
    symbol: str,
    records: Sequence[FinancialRecord],
    metric_key: str,
) -> EntitySeries:
    """Project newest-first records onto chronological points for one metric."""
    points = [(r.period_iso, r.period_label, r.values.get(metric_key)) for r in reversed(records)]
    return EntitySeries(symbol=symbol, points=tuple(points))


def _fallback_label(iso_key: str) -> str:
    try:
        return format_period_label(parse_period_key(iso_key))
    except PeriodParseError:
        return iso_key


def align_series(
    metric_key: str,
    period_type: PeriodType,
    series: Sequence[EntitySeries],
    failed_symbols: Iterable[str] = (),
) -> ComparisonResult:
    """Build a :class:`ComparisonResult` over the union of all period keys.

    Each label is the first stored label found in symbol order, falling back
    to the formatted label of the ISO key.
    """
    axis = sort_iso_keys({iso for s in series for iso, _label, _value in s.points})

    labels: list[str] = []
    for iso in axis:
        label = next(
            (lbl for s in series for p_iso, lbl, _v in s.points if p_iso == iso and lbl),
            None,
        )
        labels.append(label or _fallback_label(iso))

    per_entity: dict[str, tuple[Decimal | None, ...]] = {}
    for s in series:
        by_iso = {iso: value for iso, _label, value in s.points}
        per_entity[s.symbol] = tuple(by_iso.get(iso) for iso in axis)

    return ComparisonResult(
        metric_key=metric_key,
        period_type=period_type,
        common_periods=tuple(axis),
        labels=tuple(labels),
        per_entity=per_entity,
        failed_symbols=tuple(failed_symbols),
    )
