# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: compare one metric across several entities.

Purpose:
    Fetch the newest ``limit`` records for each symbol concurrently, project
    the requested metric and align every series onto the union of their
    period keys.

Layer:
    application

Notes:
    - Each symbol is read through its own unit of work; sessions are never
      shared between concurrent tasks.
    - A symbol whose fetch fails or times out contributes an all-None series
      and is reported in ``failed_symbols``. The request itself succeeds.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWorkFactory,
    with_store_timeout,
)
from stocktracker_api.domain.entities.comparison import ComparisonResult, EntitySeries
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import ValidationError
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.services.comparison_alignment import align_series, series_for_metric

logger = logging.getLogger(__name__)

MIN_COMPARE_SYMBOLS = 2
DEFAULT_COMPARE_MAX_SYMBOLS = 5


@dataclass(frozen=True)
class CompareEntitiesRequest:
    """Comparison parameters.

    Attributes:
        symbols: Entities to compare; duplicates collapse preserving order.
        metric_key: Standard or custom metric key.
        period_type: Cadence shared by all series.
        limit: Newest periods fetched per symbol.
        timeout_s: Optional per-request override of the store timeout.
    """

    symbols: Sequence[str]
    metric_key: str
    period_type: PeriodType = PeriodType.QUARTERLY
    limit: int = 5
    timeout_s: float | None = None


class CompareEntitiesUseCase:
    """Align one metric across 2..N entities."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        max_symbols: int = DEFAULT_COMPARE_MAX_SYMBOLS,
        max_series_limit: int = 40,
        store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
        on_symbol_failure: Callable[[str, str], None] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            uow_factory: Produces a fresh UnitOfWork per symbol.
            max_symbols: Upper bound on distinct symbols per request.
            max_series_limit: Upper bound on ``limit``.
            store_timeout_s: Default bound on each per-symbol fetch.
            on_symbol_failure: Hook called with ``(symbol, reason)`` for each
                failed symbol, e.g. to increment a counter.
        """
        self._uow_factory = uow_factory
        self._max_symbols = max_symbols
        self._max_limit = max_series_limit
        self._timeout_s = store_timeout_s
        self._on_failure = on_symbol_failure

    def _validate(self, req: CompareEntitiesRequest) -> list[str]:
        symbols = list(dict.fromkeys(s.strip() for s in req.symbols if s and s.strip()))
        if not MIN_COMPARE_SYMBOLS <= len(symbols) <= self._max_symbols:
            raise ValidationError(
                f"Between {MIN_COMPARE_SYMBOLS} and {self._max_symbols} distinct symbols "
                "are required for comparison.",
                details={"symbols": symbols},
            )
        if not req.metric_key or not req.metric_key.strip():
            raise ValidationError("metric_key is required.")
        if not 1 <= req.limit <= self._max_limit:
            raise ValidationError(
                f"limit must be between 1 and {self._max_limit}.",
                details={"limit": req.limit},
            )
        return symbols

    async def _fetch(
        self,
        symbol: str,
        req: CompareEntitiesRequest,
        timeout_s: float,
    ) -> tuple[EntitySeries, bool]:
        metric_key = req.metric_key.strip()
        try:
            async with self._uow_factory() as tx:
                repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
                window = await with_store_timeout(
                    repo.find_window(symbol, req.period_type, req.limit),
                    timeout_s=timeout_s,
                    operation="financials.find_window",
                )
        except Exception as exc:
            reason = type(exc).__name__
            logger.warning(
                "compare.symbol_failed",
                extra={"symbol": symbol, "metric_key": metric_key, "reason": reason},
            )
            if self._on_failure is not None:
                self._on_failure(symbol, reason)
            return EntitySeries(symbol=symbol), False
        return series_for_metric(symbol, window, metric_key), True

    async def execute(self, req: CompareEntitiesRequest) -> ComparisonResult:
        """Execute the comparison.

        Raises:
            ValidationError: On invalid parameters (before any fetch).
        """
        symbols = self._validate(req)
        timeout_s = req.timeout_s or self._timeout_s

        logger.info(
            "compare.start",
            extra={
                "symbols": symbols,
                "metric_key": req.metric_key,
                "period_type": req.period_type.value,
            },
        )

        outcomes = await asyncio.gather(*(self._fetch(s, req, timeout_s) for s in symbols))
        failed = [series.symbol for series, ok in outcomes if not ok]
        result = align_series(
            req.metric_key.strip(),
            req.period_type,
            [series for series, _ok in outcomes],
            failed_symbols=failed,
        )

        logger.info(
            "compare.success",
            extra={"periods": len(result.common_periods), "failed_symbols": failed},
        )
        return result
