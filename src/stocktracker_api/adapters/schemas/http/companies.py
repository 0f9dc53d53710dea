# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP schemas for the company registry and market-data sync."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema


class CompanyHTTP(BaseHTTPSchema):
    """Tracked company with flat upstream market fields."""

    symbol: str = Field(..., examples=["JKH.N0000"])
    name: str = Field(..., examples=["John Keells Holdings PLC"])
    isin: str | None = None
    category: str = ""
    market_data: dict[str, Any] = Field(
        default_factory=dict,
        description="Upstream price and identity fields keyed by provider name.",
    )
    updated_at: datetime | None = None


class CreateCompanyBody(BaseHTTPSchema):
    """Request body for ``POST /v1/companies/{symbol}``."""

    name: str = Field(..., min_length=1, max_length=255)
    isin: str | None = Field(default=None, max_length=32)
    category: str = Field(default="", max_length=128)


class UpdateCompanyBody(BaseHTTPSchema):
    """Partial update; omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    isin: str | None = Field(default=None, max_length=32)
    category: str | None = Field(default=None, max_length=128)


class SyncCompanyBody(BaseHTTPSchema):
    """Request body for ``POST /v1/sync/company``."""

    symbol: str = Field(..., min_length=1, max_length=32, examples=["JKH.N0000"])
