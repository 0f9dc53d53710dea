# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Financial records HTTP router (v1).

Endpoints:
    * GET    /v1/financials/{symbol}   chronological series with Y/Y changes
    * POST   /v1/financials/{symbol}   create (201) or merge (200) one record
    * DELETE /v1/financials/{symbol}   delete one record

Domain errors propagate to the application-level exception handler, which
renders the canonical ErrorEnvelope.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Query, Request, Response, status

from stocktracker_api.adapters.dependencies.uow import get_uow
from stocktracker_api.adapters.presenters.financials_presenter import (
    present_financial_series,
    present_upsert_result,
)
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.envelopes import DeletedResource, SuccessEnvelope
from stocktracker_api.adapters.schemas.http.financials import (
    FinancialSeriesHTTP,
    UpsertFinancialRecordBody,
    UpsertFinancialRecordResultHTTP,
)
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.application.use_cases.financials.delete_financial_record import (
    DeleteFinancialRecordRequest,
    DeleteFinancialRecordUseCase,
)
from stocktracker_api.application.use_cases.financials.get_financial_series import (
    GetFinancialSeriesRequest,
    GetFinancialSeriesUseCase,
)
from stocktracker_api.application.use_cases.financials.upsert_financial_record import (
    UpsertFinancialRecordRequest,
    UpsertFinancialRecordUseCase,
)
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.domain.entities.financial_record import MetricValues
from stocktracker_api.domain.enums.financials import PeriodType, StandardMetric
from stocktracker_api.infrastructure.logging.logger import get_json_logger
from stocktracker_api.infrastructure.observability.metrics import get_yoy_series_total

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="financials", tags=["Financials"])


def _split_metrics(raw: str | None) -> list[str] | None:
    """Parse the ``metrics=a,b`` filter; absent or blank means no filter."""
    keys = [part.strip() for part in (raw or "").split(",") if part.strip()]
    return keys or None


def _standard_values(body: UpsertFinancialRecordBody) -> MetricValues:
    standard = {StandardMetric(k): v for k, v in body.metrics.items()}
    return MetricValues(standard=standard, custom=dict(body.custom))


@router.get(
    "/{symbol}",
    summary="Financial series with Y/Y",
    description=(
        "Return the newest `limit` periods for a symbol in chronological order, "
        "each with its values and the relative change against the same period one "
        "year earlier. Missing prior-year values yield null, never zero."
    ),
    response_model=SuccessEnvelope[FinancialSeriesHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_financial_series(
    request: Request,
    response: Response,
    symbol: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
    period_type: Annotated[PeriodType, Query(description="Cadence of the series.")] = (
        PeriodType.QUARTERLY
    ),
    limit: Annotated[int, Query(description="Newest periods to return.")] = 5,
    metrics: Annotated[
        str | None,
        Query(description="Comma-separated allowlist of metric keys."),
    ] = None,
) -> Any:
    use_case = GetFinancialSeriesUseCase(
        uow,
        max_series_limit=settings.max_series_limit,
        store_timeout_s=settings.store_timeout_s,
    )
    items = await use_case.execute(
        GetFinancialSeriesRequest(
            symbol=symbol,
            period_type=period_type,
            limit=limit,
            metrics=_split_metrics(metrics),
        )
    )
    get_yoy_series_total().labels(period_type=period_type.value).inc()
    return BaseRouter.send_success(
        request, response, present_financial_series(symbol, period_type, items)
    )


@router.post(
    "/{symbol}",
    summary="Create or merge a financial record",
    description=(
        "Store values for one period. An existing record is only changed when "
        "`overwrite` is true, in which case the submitted keys replace the stored "
        "ones and all other keys are kept."
    ),
    response_model=SuccessEnvelope[UpsertFinancialRecordResultHTTP],
    responses=BaseRouter.std_error_responses(),
    status_code=status.HTTP_201_CREATED,
)
async def upsert_financial_record(
    request: Request,
    response: Response,
    symbol: str,
    body: UpsertFinancialRecordBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = UpsertFinancialRecordUseCase(uow, store_timeout_s=settings.store_timeout_s)
    result = await use_case.execute(
        UpsertFinancialRecordRequest(
            symbol=symbol,
            period_type=PeriodType(body.period_type),
            period_iso=body.period_iso,
            period_label=body.period_label,
            values=_standard_values(body),
            overwrite=body.overwrite,
        )
    )
    return BaseRouter.send_success(
        request,
        response,
        present_upsert_result(result),
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
    )


@router.delete(
    "/{symbol}",
    summary="Delete a financial record",
    response_model=SuccessEnvelope[DeletedResource],
    responses=BaseRouter.std_error_responses(),
)
async def delete_financial_record(
    request: Request,
    response: Response,
    symbol: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
    period_iso: Annotated[str, Query(min_length=4, description="Period ISO key.")],
    period_type: Annotated[
        PeriodType | None,
        Query(description="Cadence of the record; implied by the ISO key when omitted."),
    ] = None,
) -> Any:
    use_case = DeleteFinancialRecordUseCase(uow, store_timeout_s=settings.store_timeout_s)
    deleted_type = await use_case.execute(
        DeleteFinancialRecordRequest(symbol=symbol, period_type=period_type, period_iso=period_iso)
    )
    return BaseRouter.send_success(
        request,
        response,
        DeletedResource(
            resource="financial_record", id=f"{symbol}:{deleted_type.value}:{period_iso}"
        ),
    )
