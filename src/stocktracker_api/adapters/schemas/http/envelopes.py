# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Top-level response shapes: ``{"data": ...}`` on success, ``{"error": ...}`` otherwise."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stocktracker_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = [
    "ErrorObject",
    "ErrorEnvelope",
    "SuccessEnvelope",
    "DeletedResource",
]


class ErrorObject(BaseModel):
    """Body of every failed response.

    Codes are UPPER_SNAKE_CASE and stable across releases: ``VALIDATION_ERROR``,
    ``INVALID_PERIOD``, ``CONFLICT``, ``NOT_FOUND``, ``UPSTREAM_TIMEOUT``,
    ``MARKET_DATA_UNAVAILABLE``, ``UPSTREAM_SCHEMA_ERROR``, ``INTERNAL_ERROR``.
    """

    model_config = ConfigDict(
        title="ErrorObject",
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "code": "CONFLICT",
                    "http_status": 409,
                    "message": "Financial record already exists; set overwrite to merge.",
                    "details": {"symbol": "JKH.N0000", "period_iso": "2025-Q3"},
                    "trace_id": "req-123",
                }
            ]
        },
    )

    code: str = Field(..., description="UPPER_SNAKE_CASE error code.")
    http_status: int = Field(..., description="Same value as the response status.")
    message: str = Field(..., description="Short explanation for humans.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Offending symbol, period or key, when there is one.",
    )
    trace_id: str | None = Field(default=None, description="Echo of the x-trace-id header.")


class ErrorEnvelope(BaseHTTPSchema):
    """``{"error": ErrorObject}``"""

    model_config = ConfigDict(title="ErrorEnvelope", extra="forbid")

    error: ErrorObject


class SuccessEnvelope[T](BaseHTTPSchema):
    """``{"data": T}``"""

    model_config = ConfigDict(title="SuccessEnvelope", extra="forbid")

    data: T


class DeletedResource(BaseHTTPSchema):
    """Acknowledgement payload for successful deletes."""

    resource: str = Field(..., examples=["financial_record"])
    id: str = Field(..., description="Natural key of the deleted resource.")
    deleted: bool = True
