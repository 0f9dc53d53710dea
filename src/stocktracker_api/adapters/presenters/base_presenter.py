# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Shared response shaping for the HTTP routers.

Successful bodies are wrapped in ``{"data": ...}`` and carry two headers: a
strong ``ETag`` over the canonical JSON of the body and ``X-Request-ID`` with
the request's trace id. Metric values leave the service as strings produced
by :func:`decimal_to_str`.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from fastapi import Response

from stocktracker_api.adapters.schemas.http.envelopes import SuccessEnvelope

REQUEST_ID_HEADER = "X-Request-ID"


def decimal_to_str(value: Decimal | None) -> str | None:
    """Plain-notation string without trailing zeros; ``None`` passes through.

    >>> decimal_to_str(Decimal("1.500000"))
    '1.5'
    >>> decimal_to_str(Decimal("1E+3"))
    '1000'
    """
    if value is None:
        return None
    if not value:
        return "0"
    return format(value.normalize(), "f")


def _canonical(value: Any) -> str:
    if isinstance(value, Decimal):
        return decimal_to_str(value) or "0"
    if isinstance(value, datetime | date):
        return value.isoformat()
    raise TypeError(f"cannot canonicalize {type(value).__name__}")


def etag_for(payload: Mapping[str, Any]) -> str:
    """Quoted SHA-256 of ``payload`` serialized with sorted keys."""
    material = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_canonical)
    return '"' + hashlib.sha256(material.encode("utf-8")).hexdigest() + '"'


@dataclass(slots=True)
class PresentResult[T]:
    body: T | None
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int | None = None


class BasePresenter:
    """Builds success envelopes together with their response headers."""

    def present_success(
        self,
        *,
        data: Any,
        trace_id: str | None = None,
        status_code: int | None = None,
    ) -> PresentResult[SuccessEnvelope[Any]]:
        envelope = SuccessEnvelope[Any](data=data)
        headers = {"ETag": etag_for(envelope.model_dump(mode="python"))}
        if trace_id:
            headers[REQUEST_ID_HEADER] = trace_id
        return PresentResult(body=envelope, headers=headers, status_code=status_code)

    @staticmethod
    def apply_headers(result: PresentResult[Any], response: Response) -> None:
        for name, value in result.headers.items():
            response.headers[name] = value
        if result.status_code is not None:
            response.status_code = result.status_code
