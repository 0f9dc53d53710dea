# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Company registry repository interface."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from stocktracker_api.domain.entities.company import Company


class CompaniesRepository(Protocol):
    """Protocol for the tracked company registry."""

    async def search(self, query: str | None, limit: int) -> Sequence[Company]:
        """Case-insensitive substring search on symbol and name, sorted by symbol."""

    async def get(self, symbol: str) -> Company | None:
        """Return the company for ``symbol`` or None."""

    async def add(self, company: Company) -> Company:
        """Insert a new company.

        Raises:
            ConflictError: If the symbol already exists.
        """

    async def save(self, company: Company) -> Company:
        """Insert or replace a company keyed by symbol."""

    async def delete(self, symbol: str) -> bool:
        """Delete one company; return False when the symbol is unknown."""
