# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Period item returned by the Y/Y derivation engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from stocktracker_api.domain.entities.base import BaseEntity
from stocktracker_api.domain.entities.financial_record import MetricValues
from stocktracker_api.domain.enums.financials import StandardMetric


@dataclass(frozen=True, slots=True)
class YoYValues(BaseEntity):
    """Relative year-over-year change per metric.

    A value of ``None`` means "no change data": either no prior-year value
    exists or the prior value was zero.
    """

    standard: Mapping[StandardMetric, Decimal | None] = field(default_factory=dict)
    custom: Mapping[str, Decimal | None] = field(default_factory=dict)

    def restricted_to(self, keys: Iterable[str]) -> YoYValues:
        """Return a copy holding only the given keys (standard or custom)."""
        wanted = set(keys)
        return YoYValues(
            standard={m: v for m, v in self.standard.items() if m.value in wanted},
            custom={k: v for k, v in self.custom.items() if k in wanted},
        )


@dataclass(frozen=True, slots=True)
class PeriodItem(BaseEntity):
    """One period of a financial series with its Y/Y changes.

    Attributes:
        period_iso: Canonical period ISO key.
        label: Stored human label of the period.
        data: Current metric values.
        yoy: Relative change against the same period one year earlier.
    """

    period_iso: str
    label: str
    data: MetricValues
    yoy: YoYValues
