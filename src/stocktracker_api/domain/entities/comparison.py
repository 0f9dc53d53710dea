# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Cross-entity comparison result."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from stocktracker_api.domain.entities.base import BaseEntity
from stocktracker_api.domain.enums.financials import PeriodType


@dataclass(frozen=True, slots=True)
class EntitySeries(BaseEntity):
    """Chronological ``(period_iso, label, value)`` points for one symbol."""

    symbol: str
    points: Sequence[tuple[str, str, Decimal | None]] = ()


@dataclass(frozen=True, slots=True)
class ComparisonResult(BaseEntity):
    """Several entities aligned onto a shared period axis for one metric.

    Attributes:
        metric_key: Metric compared (standard or custom key).
        period_type: Cadence of all series.
        common_periods: Union of period ISO keys, ascending.
        labels: Human label per entry of ``common_periods``.
        per_entity: Values aligned to ``common_periods`` (None where absent).
        failed_symbols: Symbols whose fetch failed and contributed an empty series.
    """

    metric_key: str
    period_type: PeriodType
    common_periods: tuple[str, ...]
    labels: tuple[str, ...]
    per_entity: Mapping[str, tuple[Decimal | None, ...]]
    failed_symbols: tuple[str, ...] = field(default_factory=tuple)
