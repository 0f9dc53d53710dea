# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: financial series with year-over-year change.

Purpose:
    Fetch the newest ``limit`` records for one entity and cadence, batch-load
    their prior-year counterparts in a single lookup and derive relative Y/Y
    change per metric.

Layer:
    application

Notes:
    - Read-only. Two store round-trips at most, each bounded by the store
      timeout.
    - The metric allowlist filters output after Y/Y has been computed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.period_item import PeriodItem
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import ValidationError
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.services.yoy_engine import build_period_items, prior_keys_for

logger = logging.getLogger(__name__)

DEFAULT_SERIES_LIMIT = 5
DEFAULT_MAX_SERIES_LIMIT = 40


@dataclass(frozen=True)
class GetFinancialSeriesRequest:
    """Request parameters for a financial series.

    Attributes:
        symbol: Entity identifier.
        period_type: Cadence to read.
        limit: Maximum number of periods returned.
        metrics: Optional allowlist of metric keys (standard or custom).
        timeout_s: Optional per-request override of the store timeout.
    """

    symbol: str
    period_type: PeriodType
    limit: int = DEFAULT_SERIES_LIMIT
    metrics: Sequence[str] | None = None
    timeout_s: float | None = None


class GetFinancialSeriesUseCase:
    """Return chronological period items with Y/Y changes."""

    def __init__(
        self,
        uow: UnitOfWork,
        *,
        max_series_limit: int = DEFAULT_MAX_SERIES_LIMIT,
        store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
    ) -> None:
        self._uow = uow
        self._max_limit = max_series_limit
        self._timeout_s = store_timeout_s

    def _validate(self, req: GetFinancialSeriesRequest) -> list[str] | None:
        if not req.symbol or not req.symbol.strip():
            raise ValidationError("symbol must be a non-empty string.")
        if not isinstance(req.period_type, PeriodType):
            raise ValidationError(
                "Unsupported period type.",
                details={"period_type": str(req.period_type)},
            )
        if not 1 <= req.limit <= self._max_limit:
            raise ValidationError(
                f"limit must be between 1 and {self._max_limit}.",
                details={"limit": req.limit},
            )
        if req.metrics is None:
            return None
        keys = [m.strip() for m in req.metrics]
        if any(not k for k in keys):
            raise ValidationError("Metric filter keys must be non-empty.")
        return keys

    async def execute(self, req: GetFinancialSeriesRequest) -> list[PeriodItem]:
        """Execute the series read.

        Returns:
            Period items in ascending period order; ``[]`` when the entity has
            no records for the cadence.

        Raises:
            ValidationError: On invalid parameters (before any store access).
            UpstreamTimeoutError: If a store round-trip exceeds the timeout.
        """
        metrics = self._validate(req)
        symbol = req.symbol.strip()
        timeout_s = req.timeout_s or self._timeout_s

        logger.info(
            "financials.get_series.start",
            extra={"symbol": symbol, "period_type": req.period_type.value, "limit": req.limit},
        )

        async with self._uow as tx:
            repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
            window = await with_store_timeout(
                repo.find_window(symbol, req.period_type, req.limit),
                timeout_s=timeout_s,
                operation="financials.find_window",
            )
            if not window:
                logger.info(
                    "financials.get_series.empty",
                    extra={"symbol": symbol, "period_type": req.period_type.value},
                )
                return []

            priors = await with_store_timeout(
                repo.find_by_keys(symbol, req.period_type, prior_keys_for(window)),
                timeout_s=timeout_s,
                operation="financials.find_by_keys",
            )

        items = build_period_items(window, priors, metrics)

        logger.info(
            "financials.get_series.success",
            extra={"symbol": symbol, "items": len(items), "priors": len(priors)},
        )
        return items
