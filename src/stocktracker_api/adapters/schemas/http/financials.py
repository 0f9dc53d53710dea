# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP schemas for financial records and Y/Y series."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema
from stocktracker_api.domain.enums.financials import PeriodType, StandardMetric


class PeriodItemHTTP(BaseHTTPSchema):
    """One period of a series: values plus relative change versus one year earlier."""

    period_iso: str = Field(..., examples=["2025-Q3"])
    label: str = Field(..., examples=["Jul 2025"])
    data: dict[str, str] = Field(
        default_factory=dict,
        description="Metric key to decimal string. Absent keys mean no data.",
    )
    yoy: dict[str, str | None] = Field(
        default_factory=dict,
        description=(
            "Metric key to relative change as a decimal ratio (1 = +100%). Null when "
            "the prior-year value is missing or zero."
        ),
    )


class FinancialSeriesHTTP(BaseHTTPSchema):
    """Chronological series for one symbol and cadence."""

    symbol: str
    period_type: PeriodType
    items: list[PeriodItemHTTP] = Field(default_factory=list)


class FinancialRecordHTTP(BaseHTTPSchema):
    """One stored record, standard and custom keys flattened into ``data``."""

    symbol: str
    period_type: PeriodType
    period_iso: str
    period_label: str
    data: dict[str, str] = Field(default_factory=dict)
    custom_keys: list[str] = Field(
        default_factory=list,
        description="Keys of ``data`` that are user-defined rather than standard.",
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpsertFinancialRecordBody(BaseHTTPSchema):
    """Request body for ``POST /v1/financials/{symbol}``."""

    period_type: PeriodType
    period_iso: str = Field(..., min_length=4, max_length=16, examples=["2025-Q3"])
    period_label: str = Field(default="", max_length=64, examples=["Jul 2025"])
    metrics: dict[StandardMetric, Decimal] = Field(
        default_factory=dict,
        description="Standard metric values keyed by their camelCase key.",
    )
    custom: dict[str, Decimal] = Field(
        default_factory=dict,
        description="User-defined metric values keyed by arbitrary strings.",
    )
    overwrite: bool = Field(
        default=False,
        description="Merge into an existing record instead of failing with 409.",
    )


class UpsertFinancialRecordResultHTTP(BaseHTTPSchema):
    """Outcome of a create-or-merge write."""

    record: FinancialRecordHTTP
    created: bool
    snapshot_category: str | None = Field(
        default=None,
        description="Category whose defaults were captured by this first write, if any.",
    )
