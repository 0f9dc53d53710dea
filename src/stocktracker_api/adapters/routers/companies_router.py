# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Company registry HTTP router (v1).

Endpoints:
    * GET    /v1/companies?q                 search by symbol or name
    * GET    /v1/companies/{symbol}          one company
    * POST   /v1/companies/{symbol}          register a company
    * PUT    /v1/companies/{symbol}          partial update
    * DELETE /v1/companies/{symbol}          remove (records are kept)
    * GET    /v1/companies/{symbol}/catalog  effective metric catalog
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Query, Request, Response, status

from stocktracker_api.adapters.dependencies.uow import get_uow
from stocktracker_api.adapters.presenters.catalog_presenter import present_catalog
from stocktracker_api.adapters.presenters.companies_presenter import present_company
from stocktracker_api.adapters.routers.base_router import BaseRouter
from stocktracker_api.adapters.schemas.http.companies import (
    CompanyHTTP,
    CreateCompanyBody,
    UpdateCompanyBody,
)
from stocktracker_api.adapters.schemas.http.envelopes import DeletedResource, SuccessEnvelope
from stocktracker_api.adapters.schemas.http.metrics import MetricDefinitionHTTP
from stocktracker_api.application.uow import UnitOfWork
from stocktracker_api.application.use_cases.categories.get_effective_catalog import (
    GetEffectiveCatalogUseCase,
)
from stocktracker_api.application.use_cases.companies.create_company import (
    CreateCompanyUseCase,
)
from stocktracker_api.application.use_cases.companies.delete_company import (
    DeleteCompanyUseCase,
)
from stocktracker_api.application.use_cases.companies.get_company import GetCompanyUseCase
from stocktracker_api.application.use_cases.companies.list_companies import (
    ListCompaniesUseCase,
)
from stocktracker_api.application.use_cases.companies.update_company import (
    UpdateCompanyRequest,
    UpdateCompanyUseCase,
)
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.domain.entities.company import Company

router = BaseRouter(version="v1", resource="companies", tags=["Companies"])


@router.get(
    "",
    summary="Search companies",
    response_model=SuccessEnvelope[list[CompanyHTTP]],
    responses=BaseRouter.std_error_responses(),
)
async def list_companies(
    request: Request,
    response: Response,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
    q: Annotated[
        str | None,
        Query(max_length=64, description="Case-insensitive substring of symbol or name."),
    ] = None,
) -> Any:
    use_case = ListCompaniesUseCase(uow, store_timeout_s=settings.store_timeout_s)
    companies = await use_case.execute(q)
    return BaseRouter.send_success(request, response, [present_company(c) for c in companies])


@router.get(
    "/{symbol}",
    summary="Get a company",
    response_model=SuccessEnvelope[CompanyHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_company(
    request: Request,
    response: Response,
    symbol: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = GetCompanyUseCase(uow, store_timeout_s=settings.store_timeout_s)
    company = await use_case.execute(symbol)
    return BaseRouter.send_success(request, response, present_company(company))


@router.get(
    "/{symbol}/catalog",
    summary="Effective metric catalog for a company",
    description=(
        "Before a company has any records, its category defaults (when saved) come "
        "first, followed by the remaining base catalog. Otherwise the base catalog."
    ),
    response_model=SuccessEnvelope[list[MetricDefinitionHTTP]],
    responses=BaseRouter.std_error_responses(),
)
async def get_effective_catalog(
    request: Request,
    response: Response,
    symbol: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = GetEffectiveCatalogUseCase(uow, store_timeout_s=settings.store_timeout_s)
    catalog = await use_case.execute(symbol)
    return BaseRouter.send_success(request, response, present_catalog(catalog))


@router.post(
    "/{symbol}",
    summary="Register a company",
    response_model=SuccessEnvelope[CompanyHTTP],
    responses=BaseRouter.std_error_responses(),
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    request: Request,
    response: Response,
    symbol: str,
    body: CreateCompanyBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = CreateCompanyUseCase(uow, store_timeout_s=settings.store_timeout_s)
    company = await use_case.execute(
        Company(symbol=symbol.strip(), name=body.name, isin=body.isin, category=body.category)
    )
    return BaseRouter.send_success(
        request, response, present_company(company), status_code=status.HTTP_201_CREATED
    )


@router.put(
    "/{symbol}",
    summary="Update a company",
    response_model=SuccessEnvelope[CompanyHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def update_company(
    request: Request,
    response: Response,
    symbol: str,
    body: UpdateCompanyBody,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = UpdateCompanyUseCase(uow, store_timeout_s=settings.store_timeout_s)
    company = await use_case.execute(
        UpdateCompanyRequest(
            symbol=symbol,
            name=body.name,
            isin=body.isin,
            category=body.category,
        )
    )
    return BaseRouter.send_success(request, response, present_company(company))


@router.delete(
    "/{symbol}",
    summary="Delete a company",
    response_model=SuccessEnvelope[DeletedResource],
    responses=BaseRouter.std_error_responses(),
)
async def delete_company(
    request: Request,
    response: Response,
    symbol: str,
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Any:
    use_case = DeleteCompanyUseCase(uow, store_timeout_s=settings.store_timeout_s)
    await use_case.execute(symbol)
    return BaseRouter.send_success(
        request, response, DeletedResource(resource="company", id=symbol)
    )
