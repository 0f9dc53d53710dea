# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""CSE Transport Client: resilient, instrumented, async.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) form-encoded POSTs with a per-request timeout.
* Jittered exponential retries (bounded) on transport errors and 5xx.
* Deterministic mapping to domain errors.
* Prometheus latency and error metrics.

Endpoints:
* ``companyInfoSummery``: identity, price, beta and logo blocks for one symbol.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, Final

import httpx

from stocktracker_api.domain.exceptions.market_data import (
    MarketDataUnavailable,
    MarketDataValidationError,
)
from stocktracker_api.infrastructure.external_apis.cse.settings import CseSettings
from stocktracker_api.infrastructure.logging.logger import get_json_logger
from stocktracker_api.infrastructure.observability.metrics import (
    get_market_data_errors_total,
    get_market_data_latency_seconds,
)
from stocktracker_api.infrastructure.resilience.retry import RetryPolicy, retry_async

logger = get_json_logger(__name__)

_DEFAULT_BASE_BACKOFF: Final[float] = 0.25
_DEFAULT_MAX_BACKOFF: Final[float] = 2.5

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "User-Agent": "stocktracker-cse-client/1.0",
}


class CseClient:
    """Transport client for the CSE public API."""

    def __init__(
        self,
        settings: CseSettings,
        *,
        http: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            settings: Provider settings loaded from environment or DI.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            retry_policy: Optional retry configuration. When omitted, a
                jittered exponential policy is built from ``settings.max_retries``.
        """
        self._base_url = settings.base_url.rstrip("/")
        self._timeout = float(settings.timeout_s)
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS.copy(),
        )
        if http is not None:
            for key, value in _DEFAULT_HEADERS.items():
                self._client.headers.setdefault(key, value)

        self._retry = retry_policy or RetryPolicy(
            total=int(settings.max_retries),
            base=_DEFAULT_BASE_BACKOFF,
            cap=_DEFAULT_MAX_BACKOFF,
            jitter=True,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def company_info_summary(self, symbol: str) -> Mapping[str, Any]:
        """Call ``companyInfoSummery`` for one symbol.

        Returns:
            The parsed JSON body.

        Raises:
            MarketDataUnavailable: On transport errors or 5xx after retries, or
                on a non-retryable 4xx.
            MarketDataValidationError: If the body is not a JSON object or
                lacks ``reqSymbolInfo``.
        """
        payload = await self._post("companyInfoSummery", {"symbol": symbol})
        if not isinstance(payload.get("reqSymbolInfo"), Mapping):
            raise MarketDataValidationError(
                "CSE response did not include reqSymbolInfo.",
                details={"symbol": symbol},
            )
        return payload

    async def _post(self, endpoint: str, form: Mapping[str, str]) -> Mapping[str, Any]:
        url = f"{self._base_url}/{endpoint}"

        async def _call() -> Mapping[str, Any]:
            try:
                response = await self._client.post(url, data=dict(form), timeout=self._timeout)
            except httpx.RequestError as exc:
                raise MarketDataUnavailable(
                    "CSE API is unreachable.",
                    details={"endpoint": endpoint, "error": type(exc).__name__},
                ) from exc

            if response.status_code >= 500:
                raise MarketDataUnavailable(
                    "CSE API returned a server error.",
                    details={"endpoint": endpoint, "status": response.status_code},
                )
            if response.status_code >= 400:
                raise MarketDataUnavailable(
                    "CSE API rejected the request.",
                    details={"endpoint": endpoint, "status": response.status_code, "retryable": False},
                )

            try:
                body = response.json()
            except ValueError as exc:
                raise MarketDataValidationError(
                    "CSE API returned a non-JSON body.",
                    details={"endpoint": endpoint},
                ) from exc
            if not isinstance(body, Mapping):
                raise MarketDataValidationError(
                    "CSE API returned an unexpected body shape.",
                    details={"endpoint": endpoint, "expected": "object"},
                )
            return body

        def _retryable(outcome: Exception | Mapping[str, Any]) -> bool:
            return isinstance(outcome, MarketDataUnavailable) and outcome.details.get(
                "retryable", True
            )

        start = time.perf_counter()
        outcome = "success"
        try:
            return await retry_async(_call, policy=self._retry, retry_on=_retryable)
        except (MarketDataUnavailable, MarketDataValidationError) as exc:
            outcome = "error"
            get_market_data_errors_total().labels(
                endpoint=endpoint, reason=type(exc).__name__
            ).inc()
            logger.warning(
                "cse.request_failed",
                extra={"endpoint": endpoint, "reason": type(exc).__name__, "details": exc.details},
            )
            raise
        finally:
            get_market_data_latency_seconds().labels(endpoint=endpoint, outcome=outcome).observe(
                time.perf_counter() - start
            )
