# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Companies repository (SQLAlchemy)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from stocktracker_api.adapters.repositories.base_repository import BaseRepository
from stocktracker_api.domain.entities.company import Company
from stocktracker_api.infrastructure.database.models.financials import CompanyRow


class SqlAlchemyCompaniesRepository(BaseRepository[CompanyRow]):
    """Tracked company registry backed by ``companies``."""

    _AREA = "companies"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session)

    async def search(self, query: str | None, limit: int) -> Sequence[Company]:
        """Case-insensitive substring match on symbol or name, by symbol."""

        async def _run() -> list[Company]:
            stmt: Select[Any] = select(CompanyRow)
            text = (query or "").strip()
            if text:
                pattern = f"%{_escape_like(text)}%"
                stmt = stmt.where(
                    or_(
                        CompanyRow.symbol.ilike(pattern, escape="\\"),
                        CompanyRow.name.ilike(pattern, escape="\\"),
                    )
                )
            stmt = stmt.order_by(CompanyRow.symbol.asc()).limit(limit)
            return [_company_from_row(r) for r in await self.fetch_all(stmt)]

        return await self._observed("search", _run)

    async def get(self, symbol: str) -> Company | None:
        async def _run() -> Company | None:
            row = await self._get_row(symbol)
            return _company_from_row(row) if row is not None else None

        return await self._observed("get", _run)

    async def add(self, company: Company) -> Company:
        async def _run() -> Company:
            row = CompanyRow(
                symbol=company.symbol,
                name=company.name,
                isin=company.isin,
                category=company.category,
                market_data=dict(company.market_data),
            )
            self._session.add(row)
            await self._flush_or_conflict("Company already exists.", symbol=company.symbol)
            return _company_from_row(row)

        return await self._observed("add", _run)

    async def save(self, company: Company) -> Company:
        """Insert or replace the company keyed by symbol."""

        async def _run() -> Company:
            row = await self._get_row(company.symbol)
            if row is None:
                row = CompanyRow(symbol=company.symbol)
                self._session.add(row)
            row.name = company.name
            row.isin = company.isin
            row.category = company.category
            row.market_data = dict(company.market_data)
            row.updated_at = self.utc_now()
            await self._flush_or_conflict(
                "Company was created concurrently.", symbol=company.symbol
            )
            return _company_from_row(row)

        return await self._observed("save", _run)

    async def delete(self, symbol: str) -> bool:
        async def _run() -> bool:
            stmt = (
                delete(CompanyRow)
                .where(CompanyRow.symbol == symbol)
                .execution_options(synchronize_session=False)
            )
            res = await self._session.execute(stmt)
            return bool(res.rowcount)

        return await self._observed("delete", _run)

    async def _get_row(self, symbol: str) -> CompanyRow | None:
        return await self.fetch_optional(select(CompanyRow).where(CompanyRow.symbol == symbol))


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _company_from_row(row: CompanyRow) -> Company:
    return Company(
        symbol=row.symbol,
        name=row.name,
        isin=row.isin,
        category=row.category or "",
        market_data=dict(row.market_data or {}),
        updated_at=row.updated_at,
    )
