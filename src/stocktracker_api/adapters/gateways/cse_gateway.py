# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Adapter Gateway: CSE company summary → :class:`CompanySnapshot`.

The gateway flattens the provider's nested blocks into one market-data
mapping:

* ``reqSymbolInfo``: identity and price fields, copied by their provider key.
* ``reqSymbolBetaInfo``: beta fields, copied by their provider key.
* ``reqLogo.path``: stored as ``logoPath``.

Identity fields (``symbol``, ``name``, ``isin``) are lifted onto the snapshot
and are not repeated in ``market_data``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from stocktracker_api.domain.entities.company import CompanySnapshot
from stocktracker_api.domain.exceptions.market_data import MarketDataValidationError
from stocktracker_api.domain.interfaces.gateways.market_data_gateway import (
    MarketDataGatewayProtocol,
)

_IDENTITY_KEYS = frozenset({"symbol", "name", "isin"})


class CompanyInfoClient(Protocol):
    """Transport surface the gateway needs."""

    async def company_info_summary(self, symbol: str) -> Mapping[str, Any]: ...


class CseMarketDataGateway(MarketDataGatewayProtocol):
    """Market-data gateway backed by the CSE company summary endpoint."""

    def __init__(self, client: CompanyInfoClient) -> None:
        self._client = client

    async def fetch_company(self, symbol: str) -> CompanySnapshot:
        """Fetch and map the provider summary for ``symbol``.

        Raises:
            MarketDataUnavailable: If the provider cannot be reached.
            MarketDataValidationError: If the payload lacks identity fields.
        """
        payload = await self._client.company_info_summary(symbol)
        return map_company_summary(symbol, payload)


def map_company_summary(requested_symbol: str, payload: Mapping[str, Any]) -> CompanySnapshot:
    """Map a ``companyInfoSummery`` body to a snapshot."""
    info = payload.get("reqSymbolInfo")
    if not isinstance(info, Mapping):
        raise MarketDataValidationError(
            "CSE response did not include reqSymbolInfo.",
            details={"symbol": requested_symbol},
        )

    name = info.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MarketDataValidationError(
            "CSE response did not include a company name.",
            details={"symbol": requested_symbol},
        )

    symbol = info.get("symbol") or requested_symbol
    isin = info.get("isin") or None

    market_data: dict[str, Any] = {
        k: v for k, v in info.items() if k not in _IDENTITY_KEYS and v is not None
    }

    beta = payload.get("reqSymbolBetaInfo")
    if isinstance(beta, Mapping):
        market_data.update({k: v for k, v in beta.items() if v is not None})

    logo = payload.get("reqLogo")
    if isinstance(logo, Mapping) and logo.get("path"):
        market_data["logoPath"] = logo["path"]

    return CompanySnapshot(
        symbol=str(symbol),
        name=name.strip(),
        isin=str(isin) if isin is not None else None,
        market_data=market_data,
    )
