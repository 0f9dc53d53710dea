# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Company (tracked entity) domain entity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from stocktracker_api.domain.entities.base import BaseEntity


@dataclass(frozen=True, slots=True)
class Company(BaseEntity):
    """A tracked company/instrument.

    Attributes:
        symbol: Unique entity identifier (e.g. ``"JKH.N0000"``).
        name: Display name.
        isin: Optional ISIN.
        category: User-assigned grouping label; empty when unset.
        market_data: Flat upstream price/identity fields (opaque to the core).
        updated_at: Last update timestamp, when known.
    """

    symbol: str
    name: str
    isin: str | None = None
    category: str = ""
    market_data: Mapping[str, Any] = field(default_factory=dict)
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CompanySnapshot(BaseEntity):
    """Identity and market fields fetched from the market-data provider."""

    symbol: str
    name: str
    isin: str | None = None
    market_data: Mapping[str, Any] = field(default_factory=dict)
