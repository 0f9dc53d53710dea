# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Common Pydantic base for request and response bodies.

Unknown fields are rejected, surrounding whitespace is stripped and enum
members serialize as their string values (``"quarterly"``, ``"income"``).
Metric values leave the API as decimal strings; presenters render them
before they reach a schema.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseHTTPSchema(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        ser_json_inf_nan="null",
    )
