# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Use case: refresh a company from the market-data provider.

Purpose:
    Fetch identity and price fields for one symbol and upsert the company.
    An existing company keeps its user-assigned category.

Layer:
    application
"""

from __future__ import annotations

import logging
from dataclasses import replace

from stocktracker_api.application.uow import (
    DEFAULT_STORE_TIMEOUT_S,
    UnitOfWork,
    with_store_timeout,
)
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.domain.exceptions.financials import ValidationError
from stocktracker_api.domain.interfaces.gateways.market_data_gateway import (
    MarketDataGatewayProtocol,
)
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)

logger = logging.getLogger(__name__)


class SyncCompanyUseCase:
    """Upsert a company from a provider snapshot."""

    def __init__(
        self,
        uow: UnitOfWork,
        gateway: MarketDataGatewayProtocol,
        *,
        store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S,
    ) -> None:
        self._uow = uow
        self._gateway = gateway
        self._timeout_s = store_timeout_s

    async def execute(self, symbol: str) -> Company:
        """Execute the sync.

        Raises:
            ValidationError: If ``symbol`` is blank.
            MarketDataUnavailable: If the provider cannot be reached.
            MarketDataValidationError: If the provider payload is malformed.
        """
        wanted = symbol.strip()
        if not wanted:
            raise ValidationError("symbol is required.")

        logger.info("companies.sync.start", extra={"symbol": wanted})
        snapshot = await self._gateway.fetch_company(wanted)

        async with self._uow as tx:
            repo: CompaniesRepository = tx.get_repository(CompaniesRepository)
            current = await with_store_timeout(
                repo.get(snapshot.symbol), timeout_s=self._timeout_s, operation="companies.get"
            )
            if current is None:
                company = Company(
                    symbol=snapshot.symbol,
                    name=snapshot.name,
                    isin=snapshot.isin,
                    market_data=dict(snapshot.market_data),
                )
            else:
                company = replace(
                    current,
                    name=snapshot.name or current.name,
                    isin=snapshot.isin or current.isin,
                    market_data=dict(snapshot.market_data),
                )
            stored = await with_store_timeout(
                repo.save(company), timeout_s=self._timeout_s, operation="companies.save"
            )
            await tx.commit()

        logger.info(
            "companies.sync.success",
            extra={"symbol": stored.symbol, "was_created": current is None},
        )
        return stored
