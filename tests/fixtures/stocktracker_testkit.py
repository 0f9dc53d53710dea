# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""In-memory repositories and unit of work for use-case tests.

The fakes honour the repository Protocols closely enough for the use cases:
conflicts, not-found results, newest-first windows and field-level merges.
Writes are applied immediately; ``committed`` counts successful commits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.domain.entities.company import Company, CompanySnapshot
from stocktracker_api.domain.entities.financial_record import FinancialRecord, MetricValues
from stocktracker_api.domain.entities.metric_definition import (
    CategoryMetricDefaults,
    MetricDefinition,
)
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import ConflictError, NotFoundError
from stocktracker_api.domain.exceptions.market_data import MarketDataUnavailable
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    CategoryDefaultsRepository,
    MetricDefinitionsRepository,
)

RecordKey = tuple[str, PeriodType, str]


def values(**kwargs: Any) -> MetricValues:
    """Build MetricValues from keyword pairs, e.g. ``values(revenue="100")``."""
    return MetricValues.from_flat({k: Decimal(str(v)) for k, v in kwargs.items()})


def record(
    symbol: str,
    period_iso: str,
    *,
    label: str = "",
    period_type: PeriodType = PeriodType.QUARTERLY,
    **metrics: Any,
) -> FinancialRecord:
    return FinancialRecord(
        symbol=symbol,
        period_type=period_type,
        period_label=label or period_iso,
        period_iso=period_iso,
        values=values(**metrics),
    )


@dataclass
class InMemoryStore:
    records: dict[RecordKey, FinancialRecord] = field(default_factory=dict)
    definitions: dict[str, MetricDefinition] = field(default_factory=dict)
    category_defaults: dict[str, CategoryMetricDefaults] = field(default_factory=dict)
    companies: dict[str, Company] = field(default_factory=dict)

    def add_records(self, *items: FinancialRecord) -> None:
        for r in items:
            self.records[(r.symbol, r.period_type, r.period_iso)] = r

    def add_definitions(self, *items: MetricDefinition) -> None:
        for d in items:
            self.definitions[d.key] = d


class InMemoryFinancialRecordsRepository(FinancialRecordsRepository):
    def __init__(
        self,
        store: InMemoryStore,
        *,
        failing_symbols: Iterable[str] = (),
        stalled_symbols: Mapping[str, float] | None = None,
    ) -> None:
        self._store = store
        self._failing = set(failing_symbols)
        self._stalled = dict(stalled_symbols or {})
        self.find_by_keys_calls: list[set[str]] = []

    def _check(self, symbol: str) -> None:
        if symbol in self._failing:
            raise RuntimeError(f"store unavailable for {symbol}")

    async def find_window(
        self, symbol: str, period_type: PeriodType, limit: int
    ) -> Sequence[FinancialRecord]:
        self._check(symbol)
        if symbol in self._stalled:
            await asyncio.sleep(self._stalled[symbol])
        rows = [
            r for (s, pt, _iso), r in self._store.records.items() if s == symbol and pt is period_type
        ]
        rows.sort(key=lambda r: r.period_iso, reverse=True)
        return rows[:limit]

    async def find_by_keys(
        self, symbol: str, period_type: PeriodType, iso_keys: Iterable[str]
    ) -> dict[str, FinancialRecord]:
        keys = set(iso_keys)
        self.find_by_keys_calls.append(keys)
        return {
            iso: r
            for (s, pt, iso), r in self._store.records.items()
            if s == symbol and pt is period_type and iso in keys
        }

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
        key = (symbol, period_type, period_iso)
        current = self._store.records.get(key)
        if current is None:
            created = FinancialRecord(
                symbol=symbol,
                period_type=period_type,
                period_label=period_label or fallback_label,
                period_iso=period_iso,
                values=values,
            )
            self._store.records[key] = created
            return created, True
        if not overwrite:
            raise ConflictError("Financial record already exists.", details={"symbol": symbol})
        merged = replace(
            current,
            period_label=period_label or current.period_label,
            values=current.values.merged_with(values),
        )
        self._store.records[key] = merged
        return merged, False

    async def delete(self, symbol: str, period_type: PeriodType, period_iso: str) -> None:
        if self._store.records.pop((symbol, period_type, period_iso), None) is None:
            raise NotFoundError("Financial record not found.")

    async def exists_for_symbol(self, symbol: str) -> bool:
        return any(s == symbol for s, _pt, _iso in self._store.records)


class InMemoryMetricDefinitionsRepository(MetricDefinitionsRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def list_all(self) -> Sequence[MetricDefinition]:
        return list(self._store.definitions.values())

    async def get(self, key: str) -> MetricDefinition | None:
        return self._store.definitions.get(key)

    async def add(self, definition: MetricDefinition) -> MetricDefinition:
        if definition.key in self._store.definitions:
            raise ConflictError("Metric already exists.")
        self._store.definitions[definition.key] = definition
        return definition

    async def update(self, definition: MetricDefinition) -> MetricDefinition:
        if definition.key not in self._store.definitions:
            raise NotFoundError("Metric not found.")
        self._store.definitions[definition.key] = definition
        return definition

    async def set_order(self, key: str, order: int) -> bool:
        current = self._store.definitions.get(key)
        if current is None:
            return False
        self._store.definitions[key] = replace(current, order=order)
        return True

    async def delete(self, key: str) -> bool:
        return self._store.definitions.pop(key, None) is not None


class InMemoryCategoryDefaultsRepository(CategoryDefaultsRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, category: str) -> CategoryMetricDefaults | None:
        return self._store.category_defaults.get(category)

    async def save(
        self, category: str, metrics: Sequence[MetricDefinition]
    ) -> CategoryMetricDefaults:
        saved = CategoryMetricDefaults(category=category, metrics=tuple(metrics))
        self._store.category_defaults[category] = saved
        return saved

    async def delete(self, category: str) -> bool:
        return self._store.category_defaults.pop(category, None) is not None


class InMemoryCompaniesRepository(CompaniesRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def search(self, query: str | None, limit: int) -> Sequence[Company]:
        needle = (query or "").lower()
        hits = [
            c
            for c in self._store.companies.values()
            if not needle or needle in c.symbol.lower() or needle in c.name.lower()
        ]
        return sorted(hits, key=lambda c: c.symbol)[:limit]

    async def get(self, symbol: str) -> Company | None:
        return self._store.companies.get(symbol)

    async def add(self, company: Company) -> Company:
        if company.symbol in self._store.companies:
            raise ConflictError("Company already exists.")
        self._store.companies[company.symbol] = company
        return company

    async def save(self, company: Company) -> Company:
        self._store.companies[company.symbol] = company
        return company

    async def delete(self, symbol: str) -> bool:
        return self._store.companies.pop(symbol, None) is not None


class FakeUnitOfWork(UnitOfWork):  # type: ignore[misc]
    """Unit of work over an :class:`InMemoryStore`."""

    def __init__(
        self,
        store: InMemoryStore,
        *,
        failing_symbols: Iterable[str] = (),
        stalled_symbols: Mapping[str, float] | None = None,
    ) -> None:
        self.store = store
        self.records = InMemoryFinancialRecordsRepository(
            store, failing_symbols=failing_symbols, stalled_symbols=stalled_symbols
        )
        self._repos: dict[type[Any], Any] = {
            FinancialRecordsRepository: self.records,
            MetricDefinitionsRepository: InMemoryMetricDefinitionsRepository(store),
            CategoryDefaultsRepository: InMemoryCategoryDefaultsRepository(store),
            CompaniesRepository: InMemoryCompaniesRepository(store),
        }
        self.committed = 0
        self.rolled_back = 0

    async def __aenter__(self) -> FakeUnitOfWork:  # type: ignore[override]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        if exc is not None:
            await self.rollback()
        return None

    async def commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1

    def get_repository(self, repo_type: type[Any]) -> Any:
        return self._repos[repo_type]


class FakeMarketDataGateway:
    """Gateway returning canned snapshots, or raising for unknown symbols."""

    def __init__(self, *snapshots: CompanySnapshot) -> None:
        self._snapshots = {s.symbol: s for s in snapshots}
        self.calls: list[str] = []

    async def fetch_company(self, symbol: str) -> CompanySnapshot:
        self.calls.append(symbol)
        try:
            return self._snapshots[symbol]
        except KeyError:
            raise MarketDataUnavailable(
                "CSE request failed.", details={"symbol": symbol}
            ) from None
