# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""
Financial records repository interface.

Purpose:
    Define the storage contract for current-period financial records, keyed
    by (symbol, period type, period ISO key).

Layer:
    domain

Notes:
    Implementations must translate driver errors (e.g. unique-constraint
    violations) into domain exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.enums.financials import PeriodType


class FinancialRecordsRepository(Protocol):
    """Protocol for repositories persisting financial records."""

    async def find_window(
        self,
        symbol: str,
        period_type: PeriodType,
        limit: int,
    ) -> Sequence[FinancialRecord]:
        """Return up to ``limit`` records, newest first by period ISO key.

        Missing periods are not synthesised.
        """

    async def find_by_keys(
        self,
        symbol: str,
        period_type: PeriodType,
        iso_keys: Iterable[str],
    ) -> dict[str, FinancialRecord]:
        """Return the records among ``iso_keys`` that exist, keyed by ISO key.

        An empty key set returns ``{}`` without touching the store.
        """

    async def upsert(
        self,
        *,
        symbol: str,
        period_type: PeriodType,
        period_iso: str,
        period_label: str,
        values: MetricValues,
        overwrite: bool,
        fallback_label: str = "",
    ) -> tuple[FinancialRecord, bool]:
        """Create the record, or merge into an existing one when allowed.

        An empty ``period_label`` keeps the stored label on merge and uses
        ``fallback_label`` on create.

        Returns:
            The stored record and True when it was newly created.

        Raises:
            ConflictError: If the record exists and ``overwrite`` is False, or
                a concurrent create won the race.
        """

    async def delete(self, symbol: str, period_type: PeriodType, period_iso: str) -> None:
        """Delete one record and its values.

        Raises:
            NotFoundError: If no such record exists.
        """

    async def exists_for_symbol(self, symbol: str) -> bool:
        """Return True if any record (any period type) exists for ``symbol``."""
