# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Prometheus collectors for the store, the series reads and the CSE client.

Collectors are created lazily on the active ``prometheus_client.REGISTRY``
and memoised per registry, so re-importing this module (reload, tests that
swap the registry) never trips a duplicate-registration error.

    with observe_store_operation("financials.find_window"):
        rows = await session.execute(stmt)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Final

import prometheus_client as prom
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

LATENCY_BUCKETS: Final[tuple[float, ...]] = (
    0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0,
)  # fmt: skip

_lock = threading.RLock()
_memo: dict[tuple[int, str], Any] = {}


def _collector[C: (Counter, Histogram)](
    kind: type[C], name: str, documentation: str, labelnames: tuple[str, ...], **kwargs: Any
) -> C:
    registry = prom.REGISTRY
    key = (id(registry), name)
    with _lock:
        found = _memo.get(key)
        if found is None:
            found = getattr(registry, "_names_to_collectors", {}).get(name)
        if not isinstance(found, kind):
            try:
                found = kind(name, documentation, labelnames, registry=registry, **kwargs)
            except ValueError:
                logger.exception("metrics.register_failed", extra={"metric": name})
                raise
        _memo[key] = found
        return found


# Store


def get_store_latency_seconds() -> Histogram:
    """Repository round-trip latency by ``operation`` and ``outcome`` (success/error)."""
    return _collector(
        Histogram,
        "stocktracker_store_latency_seconds",
        "Latency (seconds) of store operations",
        ("operation", "outcome"),
        buckets=LATENCY_BUCKETS,
    )


@contextmanager
def observe_store_operation(operation: str) -> Iterator[None]:
    started = perf_counter()
    outcome = "error"
    try:
        yield
        outcome = "success"
    finally:
        get_store_latency_seconds().labels(operation=operation, outcome=outcome).observe(
            perf_counter() - started
        )


# Series and comparison


def get_yoy_series_total() -> Counter:
    return _collector(
        Counter,
        "stocktracker_yoy_series_total",
        "Financial series with Y/Y derivation served",
        ("period_type",),
    )


def get_compare_symbol_failures_total() -> Counter:
    return _collector(
        Counter,
        "stocktracker_compare_symbol_failures_total",
        "Symbols whose fetch failed during a comparison",
        ("reason",),
    )


def record_compare_symbol_failure(symbol: str, reason: str) -> None:
    """Comparison failure hook. ``symbol`` goes to the log, not to a label."""
    logger.info("compare.symbol_failed", extra={"symbol": symbol, "reason": reason})
    get_compare_symbol_failures_total().labels(reason=reason).inc()


# Market data


def get_market_data_latency_seconds() -> Histogram:
    return _collector(
        Histogram,
        "stocktracker_market_data_latency_seconds",
        "Latency (seconds) of upstream market-data calls",
        ("endpoint", "outcome"),
        buckets=LATENCY_BUCKETS,
    )


def get_market_data_errors_total() -> Counter:
    return _collector(
        Counter,
        "stocktracker_market_data_errors_total",
        "Errors encountered when calling the market-data provider",
        ("endpoint", "reason"),
    )
