# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""ASGI entry point.

``create_app`` assembles the service: trace-id middleware, optional CORS, the
error-envelope handlers and the ``/v1`` routers. The database engine is
created when the app starts serving and disposed, together with the shared
CSE client, when it stops.

Run locally with ``uvicorn stocktracker_api.main:app``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from stocktracker_api.adapters.routers.api_router import router as api_router
from stocktracker_api.config.settings import Settings, get_settings
from stocktracker_api.infrastructure.database.session import (
    dispose_engine,
    init_engine_and_sessionmaker,
)
from stocktracker_api.infrastructure.http.errors import install_error_handlers
from stocktracker_api.infrastructure.http.middleware.trace import TraceIdMiddleware
from stocktracker_api.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)

logger = get_json_logger(__name__)

SERVICE_NAME = "stocktracker-api"


def _operation_id(route: APIRoute) -> str:
    # e.g. "get__v1_financials_symbol_series" for GET /v1/financials/{symbol}/series
    verbs = ",".join(sorted(route.methods or ())).lower()
    slug = route.path_format.translate(str.maketrans("/", "_", "{}")).lower()
    return f"{verbs}_{slug}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_engine_and_sessionmaker(app.state.settings)
    try:
        yield
    finally:
        cse_client = getattr(app.state, "cse_client", None)
        if cse_client is not None:
            app.state.cse_client = None
            await cse_client.aclose()
        await dispose_engine()
        logger.info("service_shutdown", extra={"service": SERVICE_NAME})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a configured application.

    Args:
        settings: Explicit settings, mainly for tests. Defaults to the cached
            environment settings.
    """
    settings = settings or get_settings()
    configure_root_logging(settings.log_level)

    app = FastAPI(
        title="Stocktracker API",
        description="Financial statements with year-over-year analytics.",
        version=settings.service_version,
        lifespan=lifespan,
        generate_unique_id_function=_operation_id,
    )
    app.state.settings = settings

    app.add_middleware(TraceIdMiddleware)
    if settings.cors_allow_origins:
        origins = settings.cors_allow_origins
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    install_error_handlers(app)
    app.include_router(api_router)

    logger.info(
        "service_startup",
        extra={
            "service": SERVICE_NAME,
            "env": settings.environment.value,
            "version": settings.service_version,
        },
    )
    return app


app: FastAPI = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "stocktracker_api.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=int(os.getenv("PORT", "8080")),
        reload=True,
    )
