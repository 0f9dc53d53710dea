# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric catalog entities.

Purpose:
    Catalog entries describing which metric keys exist, where they display
    and in what order, plus the per-category default snapshot used to
    pre-populate new entities.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from stocktracker_api.domain.entities.base import BaseEntity
from stocktracker_api.domain.enums.financials import MetricSection


@dataclass(frozen=True, slots=True)
class MetricDefinition(BaseEntity):
    """A catalog entry (not the data itself).

    Attributes:
        key: Globally unique metric key.
        name: Display name.
        section: Statement section the metric belongs to.
        unit: Display unit (currency code, ``"%"``, ``"x"``...).
        order: Sort position within the section; gaps are fine.
        is_default: Whether the metric ships with the base catalog.
        created_by: Optional actor that created the entry.
    """

    key: str
    name: str
    section: MetricSection
    unit: str = "USD"
    order: int = 0
    is_default: bool = False
    created_by: str | None = None


@dataclass(frozen=True, slots=True)
class MetricOrderUpdate(BaseEntity):
    """Requested new ``order`` for one catalog key."""

    key: str
    order: int


@dataclass(frozen=True, slots=True)
class ReorderResult(BaseEntity):
    """Outcome of a best-effort bulk reorder."""

    updated: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CategoryMetricDefaults(BaseEntity):
    """Saved ordered catalog template for every entity sharing a category."""

    category: str
    metrics: tuple[MetricDefinition, ...] = field(default_factory=tuple)
    updated_at: datetime | None = None
