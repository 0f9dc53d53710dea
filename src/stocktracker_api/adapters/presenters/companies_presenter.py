# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Company registry presenter."""

from __future__ import annotations

from stocktracker_api.adapters.schemas.http.companies import CompanyHTTP
from stocktracker_api.domain.entities.company import Company


def present_company(company: Company) -> CompanyHTTP:
    return CompanyHTTP(
        symbol=company.symbol,
        name=company.name,
        isin=company.isin,
        category=company.category,
        market_data=dict(company.market_data),
        updated_at=company.updated_at,
    )
