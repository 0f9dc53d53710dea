# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Market-data gateway dependency wiring.

The CSE transport client is created once per application and kept on
``app.state.cse_client``; the lifespan closes it on shutdown.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from stocktracker_api.adapters.gateways.cse_gateway import CseMarketDataGateway
from stocktracker_api.domain.interfaces.gateways.market_data_gateway import (
    MarketDataGatewayProtocol,
)
from stocktracker_api.infrastructure.external_apis.cse.client import CseClient
from stocktracker_api.infrastructure.external_apis.cse.settings import CseSettings


def get_cse_client(request: Request) -> CseClient:
    """Return the application's shared CSE client, creating it on first use."""
    client: CseClient | None = getattr(request.app.state, "cse_client", None)
    if client is None:
        client = CseClient(CseSettings())
        request.app.state.cse_client = client
    return client


def get_market_data_gateway(
    client: Annotated[CseClient, Depends(get_cse_client)],
) -> MarketDataGatewayProtocol:
    return CseMarketDataGateway(client)
