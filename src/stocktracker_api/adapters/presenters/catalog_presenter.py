# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric catalog and category defaults presenter."""

from __future__ import annotations

from collections.abc import Iterable

from stocktracker_api.adapters.schemas.http.categories import CategoryDefaultsHTTP
from stocktracker_api.adapters.schemas.http.metrics import (
    MetricDefinitionHTTP,
    ReorderResultHTTP,
)
from stocktracker_api.domain.entities.metric_definition import (
    CategoryMetricDefaults,
    MetricDefinition,
    ReorderResult,
)
from stocktracker_api.domain.enums.financials import MetricSection


def present_metric_definition(definition: MetricDefinition) -> MetricDefinitionHTTP:
    return MetricDefinitionHTTP(
        key=definition.key,
        name=definition.name,
        section=definition.section,
        unit=definition.unit,
        order=definition.order,
        is_default=definition.is_default,
        created_by=definition.created_by,
    )


def present_catalog(definitions: Iterable[MetricDefinition]) -> list[MetricDefinitionHTTP]:
    return [present_metric_definition(d) for d in definitions]


def present_category_defaults(defaults: CategoryMetricDefaults) -> CategoryDefaultsHTTP:
    return CategoryDefaultsHTTP(
        category=defaults.category,
        metrics=present_catalog(defaults.metrics),
        updated_at=defaults.updated_at,
    )


def present_reorder_result(result: ReorderResult) -> ReorderResultHTTP:
    return ReorderResultHTTP(updated=list(result.updated), missing=list(result.missing))


def metric_definition_from_http(item: MetricDefinitionHTTP) -> MetricDefinition:
    """Inverse mapping for request bodies that carry full definitions."""
    return MetricDefinition(
        key=item.key,
        name=item.name,
        section=MetricSection(item.section),
        unit=item.unit,
        order=item.order,
        is_default=item.is_default,
        created_by=item.created_by,
    )
