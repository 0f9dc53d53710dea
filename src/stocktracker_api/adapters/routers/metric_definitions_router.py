# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Metric catalog HTTP router (v1).

Endpoints:
    * GET    /v1/metrics            catalog in display order (optional section)
    * GET    /v1/metrics/{key}      one definition
    * POST   /v1/metrics            add a definition at the end of its section
    * PUT    /v1/metrics/{key}      partial update
    * POST   /v1/metrics/reorder    best-effort bulk order assignment
    * DELETE /v1/metrics/{key}      remove a definition (records are untouched)
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Query, Request, Response, status

from stocktracker_api.adapters.dependencies.uow import get_uow
from stocktracker_api.adapters.presenters.catalog_presenter import (
    present_catalog,
    present_metric_definition,
    present_reorder_result,
)
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.envelopes import DeletedResource, SuccessEnvelope
from stocktracker_api.adapters.schemas.http.metrics import (
    CreateMetricDefinitionBody,
    MetricDefinitionHTTP,
    ReorderMetricsBody,
    ReorderResultHTTP,
    UpdateMetricDefinitionBody,
)
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.application.use_cases.metrics.create_metric_definition import (
    CreateMetricDefinitionRequest,
    CreateMetricDefinitionUseCase,
)
from stocktracker_api.application.use_cases.metrics.delete_metric_definition import (
    DeleteMetricDefinitionUseCase,
)
from stocktracker_api.application.use_cases.metrics.get_metric_definition import (
    GetMetricDefinitionUseCase,
)
from stocktracker_api.application.use_cases.metrics.list_metric_definitions import (
    ListMetricDefinitionsUseCase,
)
from stocktracker_api.application.use_cases.metrics.reorder_metric_definitions import (
    ReorderMetricDefinitionsUseCase,
)
from stocktracker_api.application.use_cases.metrics.update_metric_definition import (
    UpdateMetricDefinitionRequest,
    UpdateMetricDefinitionUseCase,
)
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.domain.entities.metric_definition import MetricOrderUpdate
from stocktracker_api.domain.enums.financials import MetricSection

router = BaseRouter(version="v1", resource="metrics", tags=["Metric Catalog"])


def _section(value: Any) -> MetricSection | None:
    return MetricSection(value) if value is not None else None


@router.get(
    "",
    summary="List metric definitions",
    response_model=SuccessEnvelope[list[MetricDefinitionHTTP]],
    responses=BaseRouter.std_error_responses(),
)
async def list_metric_definitions(
    request: Request,
    response: Response,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
    section: Annotated[MetricSection | None, Query(description="Restrict to one section.")] = None,
) -> Any:
    use_case = ListMetricDefinitionsUseCase(uow, store_timeout_s=settings.store_timeout_s)
    definitions = await use_case.execute(section)
    return BaseRouter.send_success(request, response, present_catalog(definitions))


@router.post(
    "/reorder",
    summary="Reorder metric definitions",
    description="Assign `order` to each listed key. Unknown keys are reported in `missing`.",
    response_model=SuccessEnvelope[ReorderResultHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def reorder_metric_definitions(
    request: Request,
    response: Response,
    body: ReorderMetricsBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = ReorderMetricDefinitionsUseCase(uow, store_timeout_s=settings.store_timeout_s)
    result = await use_case.execute(
        [MetricOrderUpdate(key=e.key, order=e.order) for e in body.entries]
    )
    return BaseRouter.send_success(request, response, present_reorder_result(result))


@router.get(
    "/{key}",
    summary="Get a metric definition",
    response_model=SuccessEnvelope[MetricDefinitionHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_metric_definition(
    request: Request,
    response: Response,
    key: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = GetMetricDefinitionUseCase(uow, store_timeout_s=settings.store_timeout_s)
    definition = await use_case.execute(key)
    return BaseRouter.send_success(request, response, present_metric_definition(definition))


@router.post(
    "",
    summary="Create a metric definition",
    response_model=SuccessEnvelope[MetricDefinitionHTTP],
    responses=BaseRouter.std_error_responses(),
    status_code=status.HTTP_201_CREATED,
)
async def create_metric_definition(
    request: Request,
    response: Response,
    body: CreateMetricDefinitionBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = CreateMetricDefinitionUseCase(
        uow,
        default_unit=settings.default_metric_unit,
        store_timeout_s=settings.store_timeout_s,
    )
    definition = await use_case.execute(
        CreateMetricDefinitionRequest(
            key=body.key,
            name=body.name,
            section=MetricSection(body.section),
            unit=body.unit,
            is_default=body.is_default,
            created_by=body.created_by,
        )
    )
    return BaseRouter.send_success(
        request,
        response,
        present_metric_definition(definition),
        status_code=status.HTTP_201_CREATED,
    )


@router.put(
    "/{key}",
    summary="Update a metric definition",
    response_model=SuccessEnvelope[MetricDefinitionHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def update_metric_definition(
    request: Request,
    response: Response,
    key: str,
    body: UpdateMetricDefinitionBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = UpdateMetricDefinitionUseCase(uow, store_timeout_s=settings.store_timeout_s)
    definition = await use_case.execute(
        UpdateMetricDefinitionRequest(
            key=key,
            name=body.name,
            section=_section(body.section),
            unit=body.unit,
            is_default=body.is_default,
        )
    )
    return BaseRouter.send_success(request, response, present_metric_definition(definition))


@router.delete(
    "/{key}",
    summary="Delete a metric definition",
    response_model=SuccessEnvelope[DeletedResource],
    responses=BaseRouter.std_error_responses(),
)
async def delete_metric_definition(
    request: Request,
    response: Response,
    key: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = DeleteMetricDefinitionUseCase(uow, store_timeout_s=settings.store_timeout_s)
    await use_case.execute(key)
    return BaseRouter.send_success(
        request, response, DeletedResource(resource="metric_definition", id=key)
    )
