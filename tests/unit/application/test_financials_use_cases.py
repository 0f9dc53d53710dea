# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from stocktracker_testkit import FakeUnitOfWork, InMemoryStore, record, values

from stocktracker_api.application.use_cases.categories.get_category_defaults import (
    GetCategoryDefaultsUseCase,
)
from stocktracker_api.application.use_cases.financials.delete_financial_record import (
    DeleteFinancialRecordRequest,
    DeleteFinancialRecordUseCase,
)
from stocktracker_api.application.use_cases.financials.get_financial_series import (
    GetFinancialSeriesRequest,
    GetFinancialSeriesUseCase,
)
from stocktracker_api.application.use_cases.financials.upsert_financial_record import (
    UpsertFinancialRecordRequest,
    UpsertFinancialRecordUseCase,
)
from stocktracker_api.application.use_cases.metrics.reorder_metric_definitions import (
    ReorderMetricDefinitionsUseCase,
)
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.entities.financial_record import MetricValues
from stocktracker_api.domain.entities.metric_definition import MetricDefinition, MetricOrderUpdate
from stocktracker_api.domain.enums.financials import MetricSection, PeriodType, StandardMetric
from stocktracker_api.domain.exceptions.financials import (
    ConflictError,
    NotFoundError,
    PeriodParseError,
    UpstreamTimeoutError,
    ValidationError,
)
from stocktracker_api.domain.services.metric_catalog import default_catalog

Q = PeriodType.QUARTERLY


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------


@pytest.mark.anyio
async def test_series_returns_chronological_items_with_yoy(store: InMemoryStore) -> None:
    store.add_records(
        record("JKH", "2024-Q3", revenue=100, eps=2),
        record("JKH", "2025-Q2", revenue=90),
        record("JKH", "2025-Q3", revenue=150, eps=1),
    )
    uow = FakeUnitOfWork(store)

    items = await GetFinancialSeriesUseCase(uow).execute(
        GetFinancialSeriesRequest(symbol="JKH", period_type=Q, limit=2)
    )

    assert [i.period_iso for i in items] == ["2025-Q2", "2025-Q3"]
    assert items[1].yoy.standard[StandardMetric.REVENUE] == Decimal("0.5")
    assert items[1].yoy.standard[StandardMetric.EPS] == Decimal("-0.5")
    assert items[0].yoy.standard[StandardMetric.REVENUE] is None
    # Prior-year records are loaded in one batched lookup.
    assert uow.records.find_by_keys_calls == [{"2024-Q3", "2024-Q2"}]


@pytest.mark.anyio
async def test_series_for_unknown_symbol_is_empty(store: InMemoryStore) -> None:
    uow = FakeUnitOfWork(store)
    items = await GetFinancialSeriesUseCase(uow).execute(
        GetFinancialSeriesRequest(symbol="NONE", period_type=Q)
    )
    assert items == []
    assert uow.records.find_by_keys_calls == []


@pytest.mark.anyio
async def test_series_applies_metric_allowlist(store: InMemoryStore) -> None:
    store.add_records(record("JKH", "2025-Q3", revenue=150, eps=1, brandValue=4))
    items = await GetFinancialSeriesUseCase(FakeUnitOfWork(store)).execute(
        GetFinancialSeriesRequest(symbol="JKH", period_type=Q, metrics=["brandValue"])
    )
    assert items[0].data.standard == {}
    assert items[0].data.custom == {"brandValue": Decimal("4")}


@pytest.mark.anyio
@pytest.mark.parametrize(
    "req",
    [
        GetFinancialSeriesRequest(symbol=" ", period_type=Q),
        GetFinancialSeriesRequest(symbol="JKH", period_type=Q, limit=0),
        GetFinancialSeriesRequest(symbol="JKH", period_type=Q, limit=41),
        GetFinancialSeriesRequest(symbol="JKH", period_type=Q, metrics=["revenue", " "]),
    ],
)
async def test_series_rejects_invalid_parameters(
    store: InMemoryStore, req: GetFinancialSeriesRequest
) -> None:
    with pytest.raises(ValidationError):
        await GetFinancialSeriesUseCase(FakeUnitOfWork(store)).execute(req)


@pytest.mark.anyio
async def test_series_store_timeout_maps_to_upstream_timeout(store: InMemoryStore) -> None:
    uow = FakeUnitOfWork(store)

    async def _slow(*_args: object, **_kwargs: object) -> list[object]:
        await asyncio.sleep(1)
        return []

    uow.records.find_window = _slow  # type: ignore[method-assign]

    with pytest.raises(UpstreamTimeoutError) as ei:
        await GetFinancialSeriesUseCase(uow, store_timeout_s=0.01).execute(
            GetFinancialSeriesRequest(symbol="JKH", period_type=Q)
        )
    assert ei.value.details["operation"] == "financials.find_window"


# ---------------------------------------------------------------------------
# Upsert / delete
# ---------------------------------------------------------------------------


@pytest.mark.anyio
async def test_upsert_creates_with_derived_label(store: InMemoryStore) -> None:
    uow = FakeUnitOfWork(store)
    result = await UpsertFinancialRecordUseCase(uow).execute(
        UpsertFinancialRecordRequest(
            symbol="JKH", period_type=Q, period_iso="2025-Q3", values=values(revenue=10)
        )
    )
    assert result.created is True
    assert result.record.period_label == "Jul 2025"
    assert result.snapshot_category is None
    assert uow.committed == 1


@pytest.mark.anyio
async def test_upsert_conflict_leaves_stored_record_unchanged(store: InMemoryStore) -> None:
    original = record("JKH", "2025-Q3", label="Jul 2025", revenue=10)
    store.add_records(original)

    with pytest.raises(ConflictError):
        await UpsertFinancialRecordUseCase(FakeUnitOfWork(store)).execute(
            UpsertFinancialRecordRequest(
                symbol="JKH", period_type=Q, period_iso="2025-Q3", values=values(revenue=99)
            )
        )
    assert store.records[("JKH", Q, "2025-Q3")] == original


@pytest.mark.anyio
async def test_upsert_overwrite_merges_field_by_field(store: InMemoryStore) -> None:
    store.add_records(record("JKH", "2025-Q3", label="Jul 2025", revenue=10, eps=1, brand=3))

    result = await UpsertFinancialRecordUseCase(FakeUnitOfWork(store)).execute(
        UpsertFinancialRecordRequest(
            symbol="JKH",
            period_type=Q,
            period_iso="2025-Q3",
            values=values(eps=2, extra=7),
            overwrite=True,
        )
    )

    assert result.created is False
    merged = result.record.values
    assert merged.get("revenue") == Decimal("10")
    assert merged.get("eps") == Decimal("2")
    assert merged.custom == {"brand": Decimal("3"), "extra": Decimal("7")}
    assert result.record.period_label == "Jul 2025"


@pytest.mark.anyio
async def test_first_record_snapshots_category_defaults(store: InMemoryStore) -> None:
    store.companies["JKH.N0000"] = Company(
        symbol="JKH.N0000", name="John Keells Holdings PLC", category="Diversified"
    )
    store.add_definitions(*default_catalog())

    first = await UpsertFinancialRecordUseCase(FakeUnitOfWork(store)).execute(
        UpsertFinancialRecordRequest(
            symbol="JKH.N0000", period_type=Q, period_iso="2025-Q3", values=values(revenue=1)
        )
    )

    assert first.snapshot_category == "Diversified"
    snapshot = store.category_defaults["Diversified"]
    assert [d.key for d in snapshot.metrics][:3] == ["revenue", "operatingExpense", "netIncome"]
    assert len(snapshot.metrics) == len(default_catalog())


@pytest.mark.anyio
async def test_later_saves_keep_snapshot_after_reorder(store: InMemoryStore) -> None:
    store.companies["JKH.N0000"] = Company(
        symbol="JKH.N0000", name="John Keells Holdings PLC", category="Diversified"
    )
    store.add_definitions(
        MetricDefinition(key="revenue", name="Revenue", section=MetricSection.INCOME, order=0),
        MetricDefinition(key="netIncome", name="Net income", section=MetricSection.INCOME, order=1),
    )
    upsert = UpsertFinancialRecordUseCase(FakeUnitOfWork(store))
    defaults = GetCategoryDefaultsUseCase(FakeUnitOfWork(store))

    await upsert.execute(
        UpsertFinancialRecordRequest(
            symbol="JKH.N0000", period_type=Q, period_iso="2025-Q2", values=values(revenue=1)
        )
    )
    before = await defaults.execute("Diversified")

    await ReorderMetricDefinitionsUseCase(FakeUnitOfWork(store)).execute(
        [MetricOrderUpdate(key="revenue", order=1), MetricOrderUpdate(key="netIncome", order=0)]
    )
    second = await upsert.execute(
        UpsertFinancialRecordRequest(
            symbol="JKH.N0000", period_type=Q, period_iso="2025-Q3", values=values(revenue=2)
        )
    )
    after = await defaults.execute("Diversified")

    assert second.snapshot_category is None
    assert store.definitions["revenue"].order == 1
    assert [(d.key, d.order) for d in after.metrics] == [("revenue", 0), ("netIncome", 1)]
    assert after.metrics == before.metrics


@pytest.mark.anyio
async def test_upsert_rejects_custom_key_named_like_standard_metric(store: InMemoryStore) -> None:
    bad = MetricValues(
        standard={StandardMetric.REVENUE: Decimal(100)}, custom={"revenue": Decimal(7)}
    )

    with pytest.raises(ValidationError) as ei:
        await UpsertFinancialRecordUseCase(FakeUnitOfWork(store)).execute(
            UpsertFinancialRecordRequest(
                symbol="JKH", period_type=Q, period_iso="2025-Q3", values=bad
            )
        )

    assert ei.value.details == {"keys": ["revenue"]}
    assert store.records == {}


@pytest.mark.anyio
async def test_upsert_rejects_mismatched_period(store: InMemoryStore) -> None:
    use_case = UpsertFinancialRecordUseCase(FakeUnitOfWork(store))
    with pytest.raises(ValidationError):
        await use_case.execute(
            UpsertFinancialRecordRequest(symbol="JKH", period_type=Q, period_iso="2025")
        )
    with pytest.raises(PeriodParseError):
        await use_case.execute(
            UpsertFinancialRecordRequest(symbol="JKH", period_type=Q, period_iso="Q3-2025")
        )
    assert store.records == {}


@pytest.mark.anyio
async def test_delete_removes_record_and_reports_missing(store: InMemoryStore) -> None:
    store.add_records(record("JKH", "2025-Q3", revenue=1))
    use_case = DeleteFinancialRecordUseCase(FakeUnitOfWork(store))
    req = DeleteFinancialRecordRequest(symbol="JKH", period_type=Q, period_iso="2025-Q3")

    await use_case.execute(req)
    assert store.records == {}

    with pytest.raises(NotFoundError):
        await use_case.execute(req)


@pytest.mark.anyio
async def test_delete_infers_cadence_from_period_key(store: InMemoryStore) -> None:
    store.add_records(record("JKH", "2024", period_type=PeriodType.ANNUAL, revenue=1))

    deleted_as = await DeleteFinancialRecordUseCase(FakeUnitOfWork(store)).execute(
        DeleteFinancialRecordRequest(symbol="JKH", period_iso="2024")
    )

    assert deleted_as is PeriodType.ANNUAL
    assert store.records == {}
