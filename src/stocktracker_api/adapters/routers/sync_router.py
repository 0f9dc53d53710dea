# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Market-data sync HTTP router (v1).

``POST /v1/sync/company`` fetches the provider summary for one symbol and
upserts the company registry entry. Provider failures surface as 502.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, Response

from stocktracker_api.adapters.dependencies.market_data import get_market_data_gateway
from stocktracker_api.adapters.dependencies.uow import get_uow
from stocktracker_api.adapters.presenters.companies_presenter import present_company
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.companies import CompanyHTTP, SyncCompanyBody
from stocktracker_api.adapters.schemas.http.envelopes import SuccessEnvelope
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.application.use_cases.companies.sync_company import SyncCompanyUseCase
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.domain.interfaces.gateways.market_data_gateway import (
    MarketDataGatewayProtocol,
)

router = BaseRouter(version="v1", resource="sync", tags=["Market Data"])


@router.post(
    "/company",
    summary="Sync a company from the exchange",
    response_model=SuccessEnvelope[CompanyHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def sync_company(
    request: Request,
    response: Response,
    body: SyncCompanyBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    gateway: Annotated[MarketDataGatewayProtocol, Depends(get_market_data_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = SyncCompanyUseCase(uow, gateway, store_timeout_s=settings.store_timeout_s)
    company = await use_case.execute(body.symbol)
    return BaseRouter.send_success(request, response, present_company(company))
