# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Repository behaviour against a real SQLite database (aiosqlite)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from stocktracker_testkit import values

from stocktracker_api.application.uow import UnitOfWorkFactory
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.entities.metric_definition import MetricDefinition
from stocktracker_api.domain.enums.financials import MetricSection, PeriodType, StandardMetric
from stocktracker_api.domain.exceptions.financials import ConflictError, NotFoundError
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

Q = PeriodType.QUARTERLY


async def _put(
    uow_factory: UnitOfWorkFactory,
    period_iso: str,
    *,
    symbol: str = "JKH.N0000",
    label: str = "",
    overwrite: bool = False,
    **metrics: object,
) -> tuple[object, bool]:
    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        out = await repo.upsert(
            symbol=symbol,
            period_type=Q,
            period_iso=period_iso,
            period_label=label,
            fallback_label="fallback",
            values=values(**metrics),
            overwrite=overwrite,
        )
        await tx.commit()
    return out


@pytest.mark.anyio
async def test_upsert_create_then_read_window(uow_factory: UnitOfWorkFactory) -> None:
    for iso in ("2024-Q3", "2025-Q1", "2025-Q3", "2025-Q2"):
        await _put(uow_factory, iso, revenue=100, brandValue="1.25")

    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        window = await repo.find_window("JKH.N0000", Q, 3)
        empty = await repo.find_window("JKH.N0000", PeriodType.ANNUAL, 3)

    assert [r.period_iso for r in window] == ["2025-Q3", "2025-Q2", "2025-Q1"]
    assert window[0].period_label == "fallback"
    assert window[0].values.standard == {StandardMetric.REVENUE: Decimal("100")}
    assert window[0].values.custom == {"brandValue": Decimal("1.25")}
    assert window[0].created_at is not None
    assert empty == []


@pytest.mark.anyio
async def test_find_by_keys_returns_only_existing(uow_factory: UnitOfWorkFactory) -> None:
    await _put(uow_factory, "2024-Q3", revenue=1)

    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        found = await repo.find_by_keys("JKH.N0000", Q, {"2024-Q3", "2024-Q2"})
        none = await repo.find_by_keys("JKH.N0000", Q, [])

    assert set(found) == {"2024-Q3"}
    assert none == {}


@pytest.mark.anyio
async def test_duplicate_without_overwrite_conflicts_and_keeps_values(
    uow_factory: UnitOfWorkFactory,
) -> None:
    await _put(uow_factory, "2025-Q3", label="Jul 2025", revenue=10)

    with pytest.raises(ConflictError):
        await _put(uow_factory, "2025-Q3", revenue=99)

    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        (stored,) = await repo.find_window("JKH.N0000", Q, 5)
    assert stored.values.get("revenue") == Decimal("10")


@pytest.mark.anyio
async def test_overwrite_merges_values_and_keeps_label(uow_factory: UnitOfWorkFactory) -> None:
    await _put(uow_factory, "2025-Q3", label="Jul 2025", revenue=10, eps=1, brandValue=3)

    record, created = await _put(uow_factory, "2025-Q3", overwrite=True, eps=2, extra=5)

    assert created is False
    assert record.period_label == "Jul 2025"
    assert record.values.get("revenue") == Decimal("10")
    assert record.values.get("eps") == Decimal("2")
    assert record.values.custom == {"brandValue": Decimal("3"), "extra": Decimal("5")}


@pytest.mark.anyio
async def test_delete_cascades_and_reports_missing(uow_factory: UnitOfWorkFactory) -> None:
    await _put(uow_factory, "2025-Q3", revenue=10, brandValue=1)

    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        assert await repo.exists_for_symbol("JKH.N0000") is True
        await repo.delete("JKH.N0000", Q, "2025-Q3")
        await tx.commit()

    async with uow_factory() as tx:
        repo = tx.get_repository(FinancialRecordsRepository)
        assert await repo.exists_for_symbol("JKH.N0000") is False
        with pytest.raises(NotFoundError):
            await repo.delete("JKH.N0000", Q, "2025-Q3")


@pytest.mark.anyio
async def test_uncommitted_work_is_rolled_back(uow_factory: UnitOfWorkFactory) -> None:
    async with uow_factory() as tx:
        repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
        await repo.upsert(
            symbol="JKH.N0000",
            period_type=Q,
            period_iso="2025-Q3",
            period_label="",
            values=values(revenue=1),
            overwrite=False,
        )

    async with uow_factory() as tx:
        repo = tx.get_repository(FinancialRecordsRepository)
        assert await repo.exists_for_symbol("JKH.N0000") is False


@pytest.mark.anyio
async def test_metric_definitions_crud_and_reorder(uow_factory: UnitOfWorkFactory) -> None:
    definition = MetricDefinition(
        key="brandValue", name="Brand value", section=MetricSection.BALANCE, unit="LKR", order=3
    )
    async with uow_factory() as tx:
        repo: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
        await repo.add(definition)
        await tx.commit()

    async with uow_factory() as tx:
        repo = tx.get_repository(MetricDefinitionsRepository)
        with pytest.raises(ConflictError):
            await repo.add(definition)

    async with uow_factory() as tx:
        repo = tx.get_repository(MetricDefinitionsRepository)
        assert await repo.set_order("brandValue", 9) is True
        assert await repo.set_order("ghost", 1) is False
        await tx.commit()

    async with uow_factory() as tx:
        repo = tx.get_repository(MetricDefinitionsRepository)
        stored = await repo.get("brandValue")
        assert stored is not None
        assert (stored.order, stored.section, stored.unit) == (9, MetricSection.BALANCE, "LKR")
        assert await repo.delete("brandValue") is True
        assert await repo.delete("brandValue") is False
        await tx.commit()


@pytest.mark.anyio
async def test_category_defaults_keep_snapshot_order(uow_factory: UnitOfWorkFactory) -> None:
    metrics = [
        MetricDefinition(key="eps", name="EPS", section=MetricSection.INCOME, order=4),
        MetricDefinition(
            key="revenue", name="Revenue", section=MetricSection.INCOME, is_default=True
        ),
    ]
    async with uow_factory() as tx:
        repo: CategoryDefaultsRepository = tx.get_repository(CategoryDefaultsRepository)
        await repo.save("Diversified", metrics)
        await repo.save("Diversified", list(reversed(metrics)))
        await tx.commit()

    async with uow_factory() as tx:
        repo = tx.get_repository(CategoryDefaultsRepository)
        saved = await repo.get("Diversified")
        assert saved is not None
        assert [m.key for m in saved.metrics] == ["revenue", "eps"]
        assert saved.metrics[0].is_default is True
        assert await repo.get("Banking") is None


@pytest.mark.anyio
async def test_companies_search_is_case_insensitive(uow_factory: UnitOfWorkFactory) -> None:
    async with uow_factory() as tx:
        repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
        await repo.add(Company(symbol="JKH.N0000", name="John Keells Holdings PLC"))
        await repo.add(Company(symbol="HAYL.N0000", name="Hayleys PLC", category="Diversified"))
        await repo.save(
            Company(symbol="COMB.N0000", name="Commercial Bank 100%", market_data={"p": 1})
        )
        await tx.commit()

    async with uow_factory() as tx:
        repo = tx.get_repository(CompaniesRepository)
        assert [c.symbol for c in await repo.search(None, 10)] == [
            "COMB.N0000",
            "HAYL.N0000",
            "JKH.N0000",
        ]
        assert [c.symbol for c in await repo.search("keells", 10)] == ["JKH.N0000"]
        assert [c.symbol for c in await repo.search("hayl", 10)] == ["HAYL.N0000"]
        assert [c.symbol for c in await repo.search("100%", 10)] == ["COMB.N0000"]
        assert [c.symbol for c in await repo.search("n0000", 2)] == ["COMB.N0000", "HAYL.N0000"]
        comb = await repo.get("COMB.N0000")
        assert comb is not None
        assert comb.market_data == {"p": 1}
        with pytest.raises(ConflictError):
            await repo.add(Company(symbol="JKH.N0000", name="dup"))
