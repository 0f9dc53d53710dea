# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: delete one financial record."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.interfaces.repositories.financial_records_repository import (
    FinancialRecordsRepository,
)
from stocktracker_api.domain.services.period_keys import parse_period_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteFinancialRecordRequest:
    """Identity of the record to delete.

    ``period_type`` defaults to the cadence the ISO key implies.
    """

    symbol: str
    period_iso: str
    period_type: PeriodType | None = None


class DeleteFinancialRecordUseCase:
    """Delete a record and its values; NotFoundError when absent."""

    def __init__(self, uow: UnitOfWork, *, store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S) -> None:
        self._uow = uow
        self._timeout_s = store_timeout_s

    async def execute(self, req: DeleteFinancialRecordRequest) -> PeriodType:
        """Delete the record and return the cadence it was deleted under."""
        key = parse_period_key(req.period_iso)
        period_type = req.period_type or key.period_type
        async with self._uow as tx:
            repo: FinancialRecordsRepository = tx.get_repository(FinancialRecordsRepository)
            await with_store_timeout(
                repo.delete(req.symbol, period_type, key.iso_key),
                timeout_s=self._timeout_s,
                operation="financials.delete",
            )
            await tx.commit()
        logger.info(
            "financials.delete.success",
            extra={"symbol": req.symbol, "period_iso": key.iso_key},
        )
        return period_type
