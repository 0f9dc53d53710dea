# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Year-over-year derivation engine.

Purpose:
    Pure computation of relative Y/Y change between a window of current
    records and their same-period-one-year-earlier counterparts.

Layer:
    domain/services

Notes:
    - ``relative_change`` returns None when the prior value is missing or
      zero. It never substitutes zero for an unknown.
    - Ratios are quantized to six decimal places.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_EVEN, Decimal

from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.entities.period_item import PeriodItem, YoYValues
from stocktracker_api.domain.enums.financials import StandardMetric
from stocktracker_api.domain.services.period_keys import prior_year_iso

RATIO_QUANTUM = Decimal("0.000001")


def relative_change(current: Decimal | None, prior: Decimal | None) -> Decimal | None:
    """Return ``(current - prior) / |prior|`` or None when undefined.

    Examples:
        >>> relative_change(Decimal("100"), Decimal("50"))
        Decimal('1.000000')
        >>> relative_change(Decimal("100"), Decimal("0")) is None
        True
    """
    if current is None or prior is None or prior == 0:
        return None
    ratio = (current - prior) / abs(prior)
    return ratio.quantize(RATIO_QUANTUM, rounding=ROUND_HALF_EVEN)


def compute_yoy(current: MetricValues, prior: MetricValues | None) -> YoYValues:
    """Compute Y/Y for every key present in ``current``.

    Standard keys are matched against the prior standard map and custom keys
    against the prior custom map, by identical key.
    """
    prior_standard: Mapping[StandardMetric, Decimal] = prior.standard if prior else {}
    prior_custom: Mapping[str, Decimal] = prior.custom if prior else {}
    return YoYValues(
        standard={
            metric: relative_change(value, prior_standard.get(metric))
            for metric, value in current.standard.items()
        },
        custom={
            key: relative_change(value, prior_custom.get(key))
            for key, value in current.custom.items()
        },
    )


def prior_keys_for(records: Iterable[FinancialRecord]) -> set[str]:
    """Distinct prior-year ISO keys for a window of records."""
    keys: set[str] = set()
    for record in records:
        prior = prior_year_iso(record.period_iso)
        if prior is not None:
            keys.add(prior)
    return keys


def build_period_items(
    window: Sequence[FinancialRecord],
    priors: Mapping[str, FinancialRecord],
    metrics: Iterable[str] | None = None,
) -> list[PeriodItem]:
    """Derive chronological period items from a newest-first window.

    Args:
        window: Current records, newest first.
        priors: Prior-year records keyed by ISO key.
        metrics: Optional allowlist applied to ``data`` and ``yoy`` after
            computation.

    Returns:
        Period items in ascending period order.
    """
    allowlist = list(metrics) if metrics is not None else None
    items: list[PeriodItem] = []
    for record in window:
        prior_key = prior_year_iso(record.period_iso)
        prior = priors.get(prior_key) if prior_key is not None else None
        data = record.values
        yoy = compute_yoy(data, prior.values if prior is not None else None)
        if allowlist is not None:
            data = data.restricted_to(allowlist)
            yoy = yoy.restricted_to(allowlist)
        items.append(
            PeriodItem(period_iso=record.period_iso, label=record.period_label, data=data, yoy=yoy)
        )
    items.reverse()
    return items
