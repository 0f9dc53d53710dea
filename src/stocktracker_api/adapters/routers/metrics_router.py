# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Prometheus scrape endpoint (``/metrics``).

The store latency histogram is created on first scrape so its series appear
before any request has touched the store.
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from stocktracker_api.infrastructure.observability.metrics import (
    get_compare_symbol_failures_total,
    get_market_data_errors_total,
    get_store_latency_seconds,
    get_yoy_series_total,
)

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics_probe() -> Response:
    """Expose Prometheus metrics in text format."""
    get_store_latency_seconds()
    get_yoy_series_total()
    get_compare_symbol_failures_total()
    get_market_data_errors_total()
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
