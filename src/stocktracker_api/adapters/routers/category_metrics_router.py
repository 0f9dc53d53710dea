# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Per-category metric defaults HTTP router (v1)."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, Response

from stocktracker_api.adapters.dependencies.uow import get_uow
from stocktracker_api.adapters.presenters.catalog_presenter import (
    metric_definition_from_http,
    present_category_defaults,
)
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.categories import (
    CategoryDefaultsHTTP,
    SetCategoryDefaultsBody,
)
from stocktracker_api.adapters.schemas.http.envelopes import DeletedResource, SuccessEnvelope
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.application.use_cases.categories.delete_category_defaults import (
    DeleteCategoryDefaultsUseCase,
)
from stocktracker_api.application.use_cases.categories.get_category_defaults import (
    GetCategoryDefaultsUseCase,
)
from stocktracker_api.application.use_cases.categories.set_category_defaults import (
    SetCategoryDefaultsUseCase,
)
from stocktracker_api.config.settings import Settings, get_settings

router = BaseRouter(version="v1", resource="category-metrics", tags=["Metric Catalog"])


@router.get(
    "/{category}",
    summary="Get category defaults",
    response_model=SuccessEnvelope[CategoryDefaultsHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_category_defaults(
    request: Request,
    response: Response,
    category: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = GetCategoryDefaultsUseCase(uow, store_timeout_s=settings.store_timeout_s)
    defaults = await use_case.execute(category)
    return BaseRouter.send_success(request, response, present_category_defaults(defaults))


@router.put(
    "/{category}",
    summary="Replace category defaults",
    description="The submitted ordered list replaces the stored snapshot wholesale.",
    response_model=SuccessEnvelope[CategoryDefaultsHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def set_category_defaults(
    request: Request,
    response: Response,
    category: str,
    body: SetCategoryDefaultsBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = SetCategoryDefaultsUseCase(uow, store_timeout_s=settings.store_timeout_s)
    saved = await use_case.execute(
        category, [metric_definition_from_http(m) for m in body.metrics]
    )
    return BaseRouter.send_success(request, response, present_category_defaults(saved))


@router.delete(
    "/{category}",
    summary="Delete category defaults",
    response_model=SuccessEnvelope[DeletedResource],
    responses=BaseRouter.std_error_responses(),
)
async def delete_category_defaults(
    request: Request,
    response: Response,
    category: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = DeleteCategoryDefaultsUseCase(uow, store_timeout_s=settings.store_timeout_s)
    await use_case.execute(category)
    return BaseRouter.send_success(
        request, response, DeletedResource(resource="category_metric_defaults", id=category)
    )
