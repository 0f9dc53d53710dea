# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP round-trips for /v1/financials against SQLite."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

JKH = "JKH.N0000"


async def _post(client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
    payload = {"period_type": "quarterly", **body}
    return await client.post(f"/v1/financials/{JKH}", json=payload)


@pytest.mark.anyio
async def test_create_returns_201_with_derived_label(client: httpx.AsyncClient) -> None:
    r = await _post(
        client,
        {"period_iso": "2025-Q3", "metrics": {"revenue": "120.50"}, "custom": {"brandValue": 7}},
    )

    assert r.status_code == 201
    assert r.headers.get("ETag")
    assert r.headers.get("X-Request-ID")
    data = r.json()["data"]
    assert data["created"] is True
    assert data["snapshot_category"] is None
    record = data["record"]
    assert record["period_label"] == "Jul 2025"
    assert record["period_type"] == "quarterly"
    assert record["data"] == {"revenue": "120.5", "brandValue": "7"}
    assert record["custom_keys"] == ["brandValue"]


@pytest.mark.anyio
async def test_duplicate_is_409_and_overwrite_merges(client: httpx.AsyncClient) -> None:
    first = await _post(
        client,
        {"period_iso": "2025-Q3", "period_label": "Sep 2025", "metrics": {"revenue": 10, "eps": 1}},
    )
    assert first.status_code == 201

    dup = await _post(client, {"period_iso": "2025-Q3", "metrics": {"revenue": 99}})
    assert dup.status_code == 409
    assert dup.json()["error"]["code"] == "CONFLICT"

    merged = await _post(
        client, {"period_iso": "2025-Q3", "metrics": {"eps": "2.5"}, "overwrite": True}
    )
    assert merged.status_code == 200
    body = merged.json()["data"]
    assert body["created"] is False
    assert body["record"]["period_label"] == "Sep 2025"
    assert body["record"]["data"] == {"revenue": "10", "eps": "2.5"}


@pytest.mark.anyio
async def test_series_has_yoy_with_nulls_for_missing_prior(client: httpx.AsyncClient) -> None:
    await _post(client, {"period_iso": "2024-Q3", "metrics": {"revenue": 100, "eps": 0}})
    await _post(client, {"period_iso": "2025-Q2", "metrics": {"revenue": 90}})
    await _post(
        client, {"period_iso": "2025-Q3", "metrics": {"revenue": 150, "eps": 2, "netIncome": 5}}
    )

    r = await client.get(f"/v1/financials/{JKH}", params={"limit": 2})

    assert r.status_code == 200
    series = r.json()["data"]
    assert series["symbol"] == JKH
    assert series["period_type"] == "quarterly"
    items = series["items"]
    assert [i["period_iso"] for i in items] == ["2025-Q2", "2025-Q3"]
    assert items[0]["yoy"] == {"revenue": None}
    latest = items[1]
    assert latest["data"] == {"revenue": "150", "eps": "2", "netIncome": "5"}
    assert latest["yoy"] == {"revenue": "0.5", "eps": None, "netIncome": None}


@pytest.mark.anyio
async def test_series_metric_allowlist(client: httpx.AsyncClient) -> None:
    await _post(client, {"period_iso": "2025-Q3", "metrics": {"revenue": 1, "eps": 2}})

    r = await client.get(f"/v1/financials/{JKH}", params={"metrics": "eps, ghost"})

    (item,) = r.json()["data"]["items"]
    assert item["data"] == {"eps": "2"}
    assert item["yoy"] == {"eps": None}


@pytest.mark.anyio
@pytest.mark.parametrize("raw", ["", " , ,"])
async def test_blank_metric_allowlist_means_no_filter(client: httpx.AsyncClient, raw: str) -> None:
    await _post(client, {"period_iso": "2025-Q3", "metrics": {"revenue": 1, "eps": 2}})

    r = await client.get(f"/v1/financials/{JKH}", params={"metrics": raw})

    (item,) = r.json()["data"]["items"]
    assert item["data"] == {"revenue": "1", "eps": "2"}


@pytest.mark.anyio
async def test_series_for_unknown_symbol_is_empty(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/financials/NOPE.N0000", params={"period_type": "annual"})

    assert r.status_code == 200
    assert r.json()["data"]["items"] == []


@pytest.mark.anyio
@pytest.mark.parametrize("limit", [0, 10_000])
async def test_series_limit_out_of_range_is_400(client: httpx.AsyncClient, limit: int) -> None:
    r = await client.get(f"/v1/financials/{JKH}", params={"limit": limit})

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_malformed_period_is_rejected(client: httpx.AsyncClient) -> None:
    bad = await _post(client, {"period_iso": "2025-Q5", "metrics": {"revenue": 1}})
    mismatch = await _post(client, {"period_iso": "2025", "metrics": {"revenue": 1}})

    assert bad.status_code == 400
    assert bad.json()["error"]["code"] == "INVALID_PERIOD"
    assert mismatch.status_code == 400
    assert mismatch.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_unknown_standard_key_fails_request_validation(client: httpx.AsyncClient) -> None:
    r = await _post(client, {"period_iso": "2025-Q3", "metrics": {"notAMetric": 1}})

    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.anyio
async def test_delete_then_404(client: httpx.AsyncClient) -> None:
    await _post(client, {"period_iso": "2025-Q3", "metrics": {"revenue": 1}})

    r = await client.delete(f"/v1/financials/{JKH}", params={"period_iso": "2025-Q3"})
    assert r.status_code == 200
    assert r.json()["data"] == {
        "resource": "financial_record",
        "id": f"{JKH}:quarterly:2025-Q3",
        "deleted": True,
    }

    again = await client.delete(f"/v1/financials/{JKH}", params={"period_iso": "2025-Q3"})
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.anyio
async def test_first_record_snapshots_category_catalog(client: httpx.AsyncClient) -> None:
    revenue = {"key": "revenue", "name": "Revenue", "section": "income"}
    await client.post("/v1/metrics", json=revenue)
    company = {"name": "John Keells", "category": "Diversified"}
    await client.post(f"/v1/companies/{JKH}", json=company)

    r = await _post(client, {"period_iso": "2025-Q3", "metrics": {"revenue": 1}})
    assert r.json()["data"]["snapshot_category"] == "Diversified"

    saved = await client.get("/v1/category-metrics/Diversified")
    assert saved.status_code == 200
    assert [m["key"] for m in saved.json()["data"]["metrics"]] == ["revenue"]


@pytest.mark.anyio
async def test_custom_key_shadowing_standard_metric_is_rejected(client: httpx.AsyncClient) -> None:
    r = await _post(
        client,
        {"period_iso": "2025-Q3", "metrics": {"revenue": 100}, "custom": {"revenue": 7, "x": 1}},
    )

    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert err["details"] == {"keys": ["revenue"]}

    series = await client.get(f"/v1/financials/{JKH}")
    assert series.json()["data"]["items"] == []


@pytest.mark.anyio
async def test_delete_without_period_type_uses_cadence_of_key(client: httpx.AsyncClient) -> None:
    await client.post(
        f"/v1/financials/{JKH}",
        json={"period_type": "annual", "period_iso": "2024", "metrics": {"revenue": 1}},
    )

    r = await client.delete(f"/v1/financials/{JKH}", params={"period_iso": "2024"})

    assert r.status_code == 200
    assert r.json()["data"]["id"] == f"{JKH}:annual:2024"
    annual = await client.get(f"/v1/financials/{JKH}", params={"period_type": "annual"})
    assert annual.json()["data"]["items"] == []
