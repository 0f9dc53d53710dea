# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Plumbing shared by the SQLAlchemy repositories.

Repositories flush but never commit; the unit of work owns the transaction.
Each public method runs through :meth:`BaseRepository._observed` so its
latency lands in ``stocktracker_store_latency_seconds`` labelled
``<area>.<operation>`` (``financials.find_window``, ``companies.save``...).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stocktracker_api.domain.exceptions.financials import ConflictError
from stocktracker_api.infrastructure.observability.metrics import observe_store_operation


class BaseRepository[TModel]:
    #: Metric label prefix, overridden per repository.
    _AREA = "store"

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def utc_now() -> datetime:
        return datetime.now(UTC)

    async def _observed[T](self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        with observe_store_operation(f"{self._AREA}.{operation}"):
            return await fn()

    async def _flush_or_conflict(self, message: str, **details: Any) -> None:
        """Flush, turning a unique-constraint violation into ``ConflictError``.

        A duplicate symbol/period, metric key or company symbol surfaces here
        when a concurrent writer got there first. The session is unusable
        afterwards until the unit of work rolls back.
        """
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(message, details=details) from exc

    async def fetch_optional(self, stmt: Select[Any]) -> TModel | None:
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def fetch_all(self, stmt: Select[Any]) -> list[TModel]:
        res = await self._session.execute(stmt)
        return list(res.scalars().all())
