# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Probes, Prometheus exposition and the error envelope through the real app."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from stocktracker_api.adapters.routers.health_router import get_db_probe


@pytest.mark.anyio
async def test_healthz_reports_version(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "version": "0.1.0"}


@pytest.mark.anyio
async def test_readyz_ok(client: httpx.AsyncClient) -> None:
    r = await client.get("/readyz")

    assert r.status_code == 200
    body = r.json()
    assert (body["status"], body["db"]) == ("ok", "ok")


@pytest.mark.anyio
async def test_readyz_503_when_db_down(app: FastAPI, client: httpx.AsyncClient) -> None:
    async def _down() -> None:
        raise ConnectionRefusedError("db down")

    app.dependency_overrides[get_db_probe] = lambda: _down

    r = await client.get("/readyz")

    assert r.status_code == 503
    body = r.json()
    assert (body["status"], body["db"], body["detail"]) == (
        "degraded",
        "down",
        "ConnectionRefusedError",
    )


@pytest.mark.anyio
async def test_metrics_exposes_project_series(client: httpx.AsyncClient) -> None:
    await client.get("/v1/financials/JKH.N0000")

    r = await client.get("/metrics")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "stocktracker_store_latency_seconds" in r.text
    assert 'stocktracker_yoy_series_total{period_type="quarterly"}' in r.text


@pytest.mark.anyio
async def test_trace_id_is_echoed_into_error_envelope(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/metrics/ghost", headers={"x-trace-id": "trace-abc"})

    assert r.status_code == 404
    assert r.headers["x-trace-id"] == "trace-abc"
    err = r.json()["error"]
    assert (err["code"], err["http_status"]) == ("NOT_FOUND", 404)
    assert err["message"] == "Metric 'ghost' not found."
    assert err["details"] == {"key": "ghost"}
    assert err["trace_id"] == "trace-abc"


@pytest.mark.anyio
async def test_request_validation_uses_envelope(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/compare", json={"metric_key": "revenue"})

    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert err["details"]["errors"]
    assert r.headers.get("x-trace-id")


@pytest.mark.anyio
async def test_unknown_route_uses_envelope(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/nowhere")

    assert r.status_code == 404
    err = r.json()["error"]
    assert (err["code"], err["http_status"], err["message"]) == ("HTTP_ERROR", 404, "Not Found")
