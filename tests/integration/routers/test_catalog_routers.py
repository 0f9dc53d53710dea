# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP round-trips for /v1/metrics and /v1/category-metrics."""

from __future__ import annotations

import httpx
import pytest


async def _create(client: httpx.AsyncClient, key: str, section: str, **extra: object) -> dict:
    r = await client.post(
        "/v1/metrics", json={"key": key, "name": key.title(), "section": section, **extra}
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.anyio
async def test_create_appends_to_section_with_default_unit(client: httpx.AsyncClient) -> None:
    first = await _create(client, "revenue", "income")
    second = await _create(client, "eps", "income", unit="LKR", created_by="analyst")
    other = await _create(client, "totalAssets", "balance")

    assert (first["order"], first["unit"], first["is_default"]) == (0, "USD", False)
    assert (second["order"], second["unit"], second["created_by"]) == (1, "LKR", "analyst")
    assert other["order"] == 0


@pytest.mark.anyio
async def test_duplicate_key_is_409(client: httpx.AsyncClient) -> None:
    await _create(client, "revenue", "income")

    r = await client.post(
        "/v1/metrics", json={"key": "revenue", "name": "Again", "section": "balance"}
    )

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


@pytest.mark.anyio
async def test_list_sorted_and_filtered_by_section(client: httpx.AsyncClient) -> None:
    await _create(client, "freeCashFlow", "cashflow")
    await _create(client, "totalAssets", "balance")
    await _create(client, "revenue", "income")
    await _create(client, "eps", "income")

    everything = await client.get("/v1/metrics")
    income = await client.get("/v1/metrics", params={"section": "income"})

    assert [m["key"] for m in everything.json()["data"]] == [
        "revenue",
        "eps",
        "totalAssets",
        "freeCashFlow",
    ]
    assert [m["key"] for m in income.json()["data"]] == ["revenue", "eps"]


@pytest.mark.anyio
async def test_get_update_delete(client: httpx.AsyncClient) -> None:
    await _create(client, "brandValue", "balance")

    updated = await client.put(
        "/v1/metrics/brandValue", json={"name": "Brand value", "unit": "%"}
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Brand value"
    assert updated.json()["data"]["section"] == "balance"

    fetched = await client.get("/v1/metrics/brandValue")
    assert fetched.json()["data"]["unit"] == "%"

    deleted = await client.delete("/v1/metrics/brandValue")
    assert deleted.json()["data"]["deleted"] is True
    missing = await client.get("/v1/metrics/brandValue")
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_reorder_reports_unknown_keys(client: httpx.AsyncClient) -> None:
    await _create(client, "revenue", "income")
    await _create(client, "eps", "income")

    r = await client.post(
        "/v1/metrics/reorder",
        json={
            "entries": [
                {"key": "eps", "order": 0},
                {"key": "revenue", "order": 5},
                {"key": "ghost", "order": 1},
            ]
        },
    )

    assert r.status_code == 200
    assert r.json()["data"] == {"updated": ["eps", "revenue"], "missing": ["ghost"]}
    listed = await client.get("/v1/metrics", params={"section": "income"})
    assert [m["key"] for m in listed.json()["data"]] == ["eps", "revenue"]


@pytest.mark.anyio
async def test_category_defaults_round_trip(client: httpx.AsyncClient) -> None:
    missing = await client.get("/v1/category-metrics/Banking")
    assert missing.status_code == 404

    body = {
        "metrics": [
            {"key": "eps", "name": "EPS", "section": "income", "unit": "LKR", "order": 2},
            {"key": "revenue", "name": "Revenue", "section": "income", "is_default": True},
        ]
    }
    put = await client.put("/v1/category-metrics/Banking", json=body)
    assert put.status_code == 200

    got = await client.get("/v1/category-metrics/Banking")
    data = got.json()["data"]
    assert data["category"] == "Banking"
    assert [m["key"] for m in data["metrics"]] == ["eps", "revenue"]
    assert data["metrics"][1]["is_default"] is True

    gone = await client.delete("/v1/category-metrics/Banking")
    assert gone.json()["data"]["id"] == "Banking"
    assert (await client.delete("/v1/category-metrics/Banking")).status_code == 404


@pytest.mark.anyio
async def test_category_defaults_reject_repeated_keys(client: httpx.AsyncClient) -> None:
    metric = {"key": "eps", "name": "EPS", "section": "income"}

    r = await client.put("/v1/category-metrics/Banking", json={"metrics": [metric, metric]})

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"
