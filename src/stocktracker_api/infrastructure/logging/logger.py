# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Structured JSON logging.

One JSON object per line with stable keys (``ts``, ``level``, ``logger``,
``message``), the caller's ``extra`` fields and, inside an HTTP request, the
request's ``trace_id``. Decimal metric values and enum members are rendered
as plain strings so log lines match API payloads.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("financials.upsert.success", extra={"symbol": "JKH.N0000"})
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar, Token
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

__all__ = [
    "JsonFormatter",
    "configure_root_logging",
    "get_json_logger",
    "reset_trace_id",
    "set_trace_id",
]

_trace_id: ContextVar[str | None] = ContextVar("stocktracker_trace_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
    | {"message", "asctime", "taskName"}
)


def set_trace_id(trace_id: str) -> Token[str | None]:
    """Bind ``trace_id`` to log lines emitted in the current context."""
    return _trace_id.set(trace_id)


def reset_trace_id(token: Token[str | None]) -> None:
    _trace_id.reset(token)


def _render(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    return str(value)


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = getattr(record, "trace_id", None) or _trace_id.get()
        if trace_id:
            payload["trace_id"] = trace_id

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_type"] = record.exc_info[0].__name__
            payload["exc_message"] = str(record.exc_info[1])

        for key, value in record.__dict__.items():
            if key not in _RESERVED and key not in payload:
                payload[key] = value

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=_render)


def configure_root_logging(level: str | int | None = None) -> None:
    """Install one JSON stream handler on the root logger (idempotent).

    Args:
        level: Level or level name; defaults to ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()
    resolved = level if level is not None else os.getenv("LOG_LEVEL") or "INFO"
    root.setLevel(resolved.upper() if isinstance(resolved, str) else resolved)

    if not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the module logger; output goes through the root JSON handler."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
