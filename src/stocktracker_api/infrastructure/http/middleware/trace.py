# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Per-request ``x-trace-id``.

A well-formed inbound id is reused, anything else is replaced by a UUID4. The
id is stored on ``request.state.trace_id`` for the error handlers, bound to
the JSON logger for the duration of the request and echoed on the response.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stocktracker_api.infrastructure.logging.logger import reset_trace_id, set_trace_id

TRACE_HEADER = "x-trace-id"

_TRACE_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_trace_id(inbound: str | None) -> str:
    """Return the inbound id when it is safe to echo, else a fresh UUID4."""
    candidate = (inbound or "").strip()
    return candidate if _TRACE_ID_RE.match(candidate) else str(uuid.uuid4())


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id
        token = set_trace_id(trace_id)
        try:
            response = await call_next(request)
        finally:
            reset_trace_id(token)
        response.headers[TRACE_HEADER] = trace_id
        return response
