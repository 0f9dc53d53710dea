# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""HTTP schemas for per-category metric defaults."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema
from stocktracker_api.adapters.schemas.http.metrics import MetricDefinitionHTTP


class CategoryDefaultsHTTP(BaseHTTPSchema):
    """Saved ordered catalog snapshot for one category."""

    category: str
    metrics: list[MetricDefinitionHTTP] = Field(default_factory=list)
    updated_at: datetime | None = None


class SetCategoryDefaultsBody(BaseHTTPSchema):
    """Replacement snapshot for ``PUT /v1/category-metrics/{category}``."""

    metrics: list[MetricDefinitionHTTP] = Field(default_factory=list)
