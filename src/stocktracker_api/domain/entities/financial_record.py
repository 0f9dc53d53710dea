# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Financial record entities.

Purpose:
    Model one stored set of statement values for a (symbol, period type,
    period) triple. Standard and custom metrics are held in two explicit maps
    so the schema-known/free-form boundary stays visible in the types.

Layer:
    domain/entities

Notes:
    - Missing keys are absent, never zero. Callers must treat absence as
      "no data".
    - All numeric values are :class:`decimal.Decimal`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from stocktracker_api.domain.entities.base import BaseEntity
from stocktracker_api.domain.enums.financials import PeriodType, StandardMetric


@dataclass(frozen=True, slots=True)
class MetricValues(BaseEntity):
    """Pair of standard and custom metric maps.

    Attributes:
        standard: Values for schema-known metric keys.
        custom: Values for user-defined metric keys (arbitrary strings).
    """

    standard: Mapping[StandardMetric, Decimal] = field(default_factory=dict)
    custom: Mapping[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_flat(cls, values: Mapping[str, Decimal]) -> MetricValues:
        """Split a flat ``key -> value`` mapping into standard and custom maps."""
        standard: dict[StandardMetric, Decimal] = {}
        custom: dict[str, Decimal] = {}
        for key, value in values.items():
            metric = StandardMetric.from_key(key)
            if metric is None:
                custom[key] = value
            else:
                standard[metric] = value
        return cls(standard=standard, custom=custom)

    def get(self, key: str) -> Decimal | None:
        """Look a key up in the standard map first, then in the custom map."""
        metric = StandardMetric.from_key(key)
        if metric is not None and metric in self.standard:
            return self.standard[metric]
        return self.custom.get(key)

    def is_empty(self) -> bool:
        """Return True when neither map holds a value."""
        return not self.standard and not self.custom

    def merged_with(self, incoming: MetricValues) -> MetricValues:
        """Return a field-level merge where ``incoming`` keys win.

        Keys absent from ``incoming`` keep their current value in both maps.
        """
        return MetricValues(
            standard={**self.standard, **incoming.standard},
            custom={**self.custom, **incoming.custom},
        )

    def restricted_to(self, keys: Iterable[str]) -> MetricValues:
        """Return a copy holding only the given keys (standard or custom)."""
        wanted = set(keys)
        return MetricValues(
            standard={m: v for m, v in self.standard.items() if m.value in wanted},
            custom={k: v for k, v in self.custom.items() if k in wanted},
        )


@dataclass(frozen=True, slots=True)
class FinancialRecord(BaseEntity):
    """Current statement values for one entity and period.

    Attributes:
        symbol: Entity identifier (e.g. ``"JKH.N0000"``).
        period_type: Quarterly or annual cadence.
        period_label: Human label (e.g. ``"Jul 2025"``).
        period_iso: Canonical period ISO key (e.g. ``"2025-Q3"``).
        values: Standard and custom metric values.
        created_at: Creation timestamp, when known.
        updated_at: Last update timestamp, when known.
    """

    symbol: str
    period_type: PeriodType
    period_label: str
    period_iso: str
    values: MetricValues = field(default_factory=MetricValues)
    created_at: datetime | None = None
    updated_at: datetime | None = None
