# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""API Router Aggregator (Adapters Layer).

Compose the top-level ``router`` that includes every feature router. Each
``BaseRouter`` already carries its ``/v1/<resource>`` prefix.
"""

from __future__ import annotations

from fastapi import APIRouter

from stocktracker_api.adapters.routers.category_metrics_router import (
    router as category_metrics_router,
)
from stocktracker_api.adapters.routers.companies_router import router as companies_router
from stocktracker_api.adapters.routers.compare_router import router as compare_router
from stocktracker_api.adapters.routers.financials_router import router as financials_router
from stocktracker_api.adapters.routers.health_router import router as health_router
from stocktracker_api.adapters.routers.metric_definitions_router import (
    router as metric_definitions_router,
)
from stocktracker_api.adapters.routers.metrics_router import router as metrics_router
from stocktracker_api.adapters.routers.sync_router import router as sync_router

router = APIRouter()

router.include_router(health_router)
router.include_router(metrics_router)
router.include_router(financials_router)
router.include_router(metric_definitions_router)
router.include_router(category_metrics_router)
router.include_router(companies_router)
router.include_router(sync_router)
router.include_router(compare_router)
