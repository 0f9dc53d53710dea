# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric catalog ordering and merge rules.

Purpose:
    Pure helpers for the metric catalog: deterministic ordering, next order
    slot within a section, the effective catalog for an entity with category
    defaults, and the built-in default catalog.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.enums.financials import (
    SECTION_ORDER,
    STANDARD_METRIC_SECTIONS,
    MetricSection,
    StandardMetric,
)

_DEFAULT_NAMES: dict[StandardMetric, tuple[str, str | None]] = {
    StandardMetric.REVENUE: ("Revenue", None),
    StandardMetric.OPERATING_EXPENSE: ("Operating expense", None),
    StandardMetric.NET_INCOME: ("Net income", None),
    StandardMetric.NET_PROFIT_MARGIN: ("Net profit margin", "%"),
    StandardMetric.EPS: ("Earnings per share", None),
    StandardMetric.EBITDA: ("EBITDA", None),
    StandardMetric.EFFECTIVE_TAX_RATE: ("Effective tax rate", "%"),
    StandardMetric.CASH_AND_SHORT_TERM_INVESTMENTS: ("Cash and short-term investments", None),
    StandardMetric.TOTAL_ASSETS: ("Total assets", None),
    StandardMetric.TOTAL_LIABILITIES: ("Total liabilities", None),
    StandardMetric.TOTAL_EQUITY: ("Total equity", None),
    StandardMetric.SHARES_OUTSTANDING: ("Shares outstanding", "shares"),
    StandardMetric.PRICE_TO_BOOK: ("Price to book", "x"),
    StandardMetric.RETURN_ON_ASSETS: ("Return on assets", "%"),
    StandardMetric.RETURN_ON_CAPITAL: ("Return on capital", "%"),
    StandardMetric.CASH_FROM_OPERATIONS: ("Cash from operations", None),
    StandardMetric.CASH_FROM_INVESTING: ("Cash from investing", None),
    StandardMetric.CASH_FROM_FINANCING: ("Cash from financing", None),
    StandardMetric.NET_CHANGE_IN_CASH: ("Net change in cash", None),
    StandardMetric.FREE_CASH_FLOW: ("Free cash flow", None),
}


def catalog_sort_key(definition: MetricDefinition) -> tuple[int, int, str]:
    """Section order, then ``order``, then ``name``."""
    return (SECTION_ORDER[definition.section], definition.order, definition.name)


def sort_catalog(
    definitions: Iterable[MetricDefinition],
    section: MetricSection | None = None,
) -> list[MetricDefinition]:
    """Return definitions in display order, optionally restricted to a section."""
    selected = [d for d in definitions if section is None or d.section is section]
    return sorted(selected, key=catalog_sort_key)


def next_order(definitions: Iterable[MetricDefinition], section: MetricSection) -> int:
    """Return ``max(order) + 1`` within ``section``, or 0 for an empty section."""
    orders = [d.order for d in definitions if d.section is section]
    return max(orders) + 1 if orders else 0


def effective_catalog(
    base: Sequence[MetricDefinition],
    category_defaults: Sequence[MetricDefinition],
) -> list[MetricDefinition]:
    """Category entries first (stored order), then base entries not listed.

    Args:
        base: Base catalog, already in display order.
        category_defaults: Saved category snapshot in its stored order.
    """
    listed = {d.key for d in category_defaults}
    return [*category_defaults, *(d for d in base if d.key not in listed)]


def default_catalog(default_unit: str = "USD") -> list[MetricDefinition]:
    """Built-in catalog covering every standard metric, in section order."""
    definitions: list[MetricDefinition] = []
    per_section: dict[MetricSection, int] = {}
    for metric in StandardMetric:
        section = STANDARD_METRIC_SECTIONS[metric]
        order = per_section.get(section, 0)
        per_section[section] = order + 1
        name, unit = _DEFAULT_NAMES[metric]
        definitions.append(
            MetricDefinition(
                key=metric.value,
                name=name,
                section=section,
                unit=unit or default_unit,
                order=order,
                is_default=True,
            )
        )
    return definitions
