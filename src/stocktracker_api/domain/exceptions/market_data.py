# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Failures of the upstream market-data provider (the CSE company API)."""

from __future__ import annotations

from .base import DomainError


class MarketDataUnavailable(DomainError):
    """The provider could not be reached, timed out or answered with an error."""

    code = "MARKET_DATA_UNAVAILABLE"
    http_status = 502


class MarketDataValidationError(DomainError):
    """The provider answered, but not with a payload we can map."""

    code = "UPSTREAM_SCHEMA_ERROR"
    http_status = 502
