# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric definition and category defaults repository interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from stocktracker_api.domain.entities.metric_definition import (
    CategoryMetricDefaults,
    MetricDefinition,
)


class MetricDefinitionsRepository(Protocol):
    """Protocol for the base metric catalog store."""

    async def list_all(self) -> Sequence[MetricDefinition]:
        """Return every definition (ordering is applied by callers)."""

    async def get(self, key: str) -> MetricDefinition | None:
        """Return the definition for ``key`` or None."""

    async def add(self, definition: MetricDefinition) -> MetricDefinition:
        """Insert a new definition.

        Raises:
            ConflictError: If the key already exists.
        """

    async def update(self, definition: MetricDefinition) -> MetricDefinition:
        """Replace the stored fields of an existing definition.

        Raises:
            NotFoundError: If the key does not exist.
        """

    async def set_order(self, key: str, order: int) -> bool:
        """Set ``order`` for one key; return False when the key is unknown."""

    async def delete(self, key: str) -> bool:
        """Delete one definition; return False when the key is unknown."""


class CategoryDefaultsRepository(Protocol):
    """Protocol for per-category catalog snapshots."""

    async def get(self, category: str) -> CategoryMetricDefaults | None:
        """Return the stored snapshot for ``category`` or None."""

    async def save(
        self,
        category: str,
        metrics: Sequence[MetricDefinition],
    ) -> CategoryMetricDefaults:
        """Replace the snapshot for ``category`` wholesale."""

    async def delete(self, category: str) -> bool:
        """Delete the snapshot; return False when none was stored."""
