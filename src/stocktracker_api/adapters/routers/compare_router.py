# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Cross-entity comparison HTTP router (v1).

``POST /v1/compare`` aligns one metric across 2..N symbols. A symbol whose
fetch fails contributes an all-null series and is listed in
``failed_symbols``; the request still succeeds.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, Response

from stocktracker_api.adapters.dependencies.uow import get_uow_factory
from stocktracker_api.adapters.presenters.compare_presenter import present_comparison
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.compare import CompareBody, ComparisonHTTP
from stocktracker_api.adapters.schemas.http.envelopes import SuccessEnvelope
from stocktracker_api.application.uow import UnitOfWorkFactory
from stocktracker_api.application.use_cases.compare.compare_entities import (
    CompareEntitiesRequest,
    CompareEntitiesUseCase,
)
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.infrastructure.observability.metrics import record_compare_symbol_failure

router = BaseRouter(version="v1", resource="compare", tags=["Compare"])


@router.post(
    "",
    summary="Compare one metric across entities",
    response_model=SuccessEnvelope[ComparisonHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def compare_entities(
    request: Request,
    response: Response,
    body: CompareBody,
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = CompareEntitiesUseCase(
        uow_factory,
        max_symbols=settings.compare_max_symbols,
        max_series_limit=settings.max_series_limit,
        store_timeout_s=settings.store_timeout_s,
        on_symbol_failure=record_compare_symbol_failure,
    )
    result = await use_case.execute(
        CompareEntitiesRequest(
            symbols=body.symbols,
            metric_key=body.metric_key,
            period_type=PeriodType(body.period_type),
            limit=body.limit,
        )
    )
    return BaseRouter.send_success(request, response, present_comparison(result))
