# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT

from __future__ import annotations

import json
import logging
from decimal import Decimal

from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.infrastructure.http.middleware.trace import resolve_trace_id
from stocktracker_api.infrastructure.logging.logger import (
    JsonFormatter,
    configure_root_logging,
    get_json_logger,
    reset_trace_id,
    set_trace_id,
)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("stocktracker.test", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_stable_keys_and_extras() -> None:
    line = JsonFormatter().format(_record(symbol="JKH.N0000", ratio=Decimal("0.5")))
    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["logger"] == "stocktracker.test"
    assert payload["message"] == "hello"
    assert payload["symbol"] == "JKH.N0000"
    assert payload["ratio"] == "0.5"
    assert "ts" in payload


def test_formatter_includes_bound_trace_id() -> None:
    token = set_trace_id("trace-1")
    try:
        payload = json.loads(JsonFormatter().format(_record()))
    finally:
        reset_trace_id(token)
    assert payload["trace_id"] == "trace-1"
    assert "trace_id" not in json.loads(JsonFormatter().format(_record()))


def test_formatter_renders_enums_and_collections() -> None:
    payload = json.loads(
        JsonFormatter().format(_record(period_type=PeriodType.ANNUAL, missing={"b", "a"}))
    )
    assert payload["period_type"] == "annual"
    assert payload["missing"] == ["a", "b"]


def test_resolve_trace_id_rejects_unsafe_values() -> None:
    assert resolve_trace_id("abc-123") == "abc-123"
    assert resolve_trace_id("bad value\n") != "bad value\n"
    assert len(resolve_trace_id(None)) == 36


def test_configure_root_logging_is_idempotent() -> None:
    configure_root_logging("DEBUG")
    configure_root_logging("WARNING")
    root = logging.getLogger()
    json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
    assert len(json_handlers) == 1
    assert root.level == logging.WARNING
    assert get_json_logger("x").propagate is True
