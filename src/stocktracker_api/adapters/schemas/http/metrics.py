# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP schemas for the metric catalog."""

from __future__ import annotations

from pydantic import Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema
from stocktracker_api.domain.enums.financials import MetricSection


class MetricDefinitionHTTP(BaseHTTPSchema):
    """Catalog entry."""

    key: str = Field(..., min_length=1, max_length=128, examples=["revenue"])
    name: str = Field(..., min_length=1, max_length=255, examples=["Revenue"])
    section: MetricSection
    unit: str = Field(default="USD", min_length=1, max_length=16)
    order: int = 0
    is_default: bool = False
    created_by: str | None = None


class CreateMetricDefinitionBody(BaseHTTPSchema):
    """Request body for ``POST /v1/metrics``; ``order`` is assigned server-side."""

    key: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    section: MetricSection
    unit: str | None = Field(default=None, min_length=1, max_length=16)
    is_default: bool = False
    created_by: str | None = Field(default=None, max_length=255)


class UpdateMetricDefinitionBody(BaseHTTPSchema):
    """Partial update for ``PUT /v1/metrics/{key}``; omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    section: MetricSection | None = None
    unit: str | None = Field(default=None, min_length=1, max_length=16)
    is_default: bool | None = None


class MetricOrderEntryHTTP(BaseHTTPSchema):
    key: str = Field(..., min_length=1)
    order: int


class ReorderMetricsBody(BaseHTTPSchema):
    """Bulk ``order`` assignment; unknown keys are reported, not rejected."""

    entries: list[MetricOrderEntryHTTP] = Field(default_factory=list)


class ReorderResultHTTP(BaseHTTPSchema):
    updated: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
