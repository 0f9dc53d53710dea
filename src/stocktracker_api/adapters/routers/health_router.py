# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

* ``GET /healthz``: liveness; never touches dependencies.
* ``GET /readyz``: readiness; runs ``SELECT 1`` through the session factory.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field
from sqlalchemy import text

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.infrastructure.database.session import get_sessionmaker
from stocktracker_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter(tags=["Health"])

DbProbe = Callable[[], Awaitable[None]]


class LivenessResponse(BaseHTTPSchema):
    status: Literal["ok"] = "ok"
    version: str


class ReadinessResponse(BaseHTTPSchema):
    status: Literal["ok", "degraded"]
    db: Literal["ok", "down"]
    duration_ms: float = Field(..., ge=0.0)
    detail: str | None = None


async def _select_one() -> None:
    async with get_sessionmaker()() as session:
        await session.execute(text("SELECT 1"))


def get_db_probe() -> DbProbe:
    """DI token for the readiness probe; tests override it."""
    return _select_one


@router.get("/healthz", response_model=LivenessResponse, summary="Liveness probe")
async def healthz(settings: Annotated[Settings, Depends(get_settings)]) -> LivenessResponse:
    return LivenessResponse(version=settings.service_version)


@router.get("/readyz", response_model=ReadinessResponse, summary="Readiness probe")
async def readyz(
    response: Response,
    probe: Annotated[DbProbe, Depends(get_db_probe)],
) -> ReadinessResponse:
    start = time.perf_counter()
    try:
        await probe()
    except Exception as exc:  # noqa: BLE001
        logger.warning("health.readyz.db_down", extra={"error": type(exc).__name__})
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(
            status="degraded",
            db="down",
            duration_ms=(time.perf_counter() - start) * 1000.0,
            detail=type(exc).__name__,
        )
    return ReadinessResponse(
        status="ok", db="ok", duration_ms=(time.perf_counter() - start) * 1000.0
    )
