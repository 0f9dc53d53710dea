# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP schemas for cross-entity comparison."""

from __future__ import annotations

from pydantic import Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema
from stocktracker_api.domain.enums.financials import PeriodType


class CompareBody(BaseHTTPSchema):
    """Request body for ``POST /v1/compare``."""

    symbols: list[str] = Field(..., min_length=1, examples=[["JKH.N0000", "HAYL.N0000"]])
    metric_key: str = Field(..., examples=["revenue"])
    period_type: PeriodType = PeriodType.QUARTERLY
    limit: int = Field(default=5, ge=1)


class ComparisonHTTP(BaseHTTPSchema):
    """One metric aligned across entities on a shared period axis.

    ``per_entity[symbol][i]`` is the value at ``common_periods[i]`` as a
    decimal string, or null when that entity has no value there.
    """

    metric_key: str
    period_type: PeriodType
    common_periods: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    per_entity: dict[str, list[str | None]] = Field(default_factory=dict)
    failed_symbols: list[str] = Field(default_factory=list)
