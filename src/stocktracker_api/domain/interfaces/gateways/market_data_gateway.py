# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Market Data Gateway Protocol.

Synopsis:
    Domain-level Protocol (PEP 544) that abstracts the exchange's company
    information endpoint. Concrete implementations live in the adapters
    layer and must satisfy this contract.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol

from stocktracker_api.domain.entities.company import CompanySnapshot


class MarketDataGatewayProtocol(Protocol):
    """Abstraction over the market-data provider.

    Implementations translate transport failures into
    ``MarketDataUnavailable`` and malformed payloads into
    ``MarketDataValidationError``.
    """

    async def fetch_company(self, symbol: str) -> CompanySnapshot:
        """Return identity and market fields for ``symbol``."""
