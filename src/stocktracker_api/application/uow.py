# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Transaction boundary for use cases.

Use cases depend on :class:`UnitOfWork` only: they enter it, ask it for
repositories by their domain Protocol and commit. The SQLAlchemy version
lives in ``adapters.uow``; tests use an in-memory one.

Every store call a use case makes is bounded by :func:`with_store_timeout`,
which turns a stalled database into ``UpstreamTimeoutError`` (HTTP 504).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import Any, Protocol, TypeVar, runtime_checkable

from stocktracker_api.domain.exceptions.financials import UpstreamTimeoutError

TResult = TypeVar("TResult")

DEFAULT_STORE_TIMEOUT_S = 5.0


@runtime_checkable
class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """One transactional scope over the financial, catalog and company stores.

    Leaving the scope without :meth:`commit` discards the scope's writes.
    """

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the implementation of ``repo_type`` bound to this scope.

        ``repo_type`` is a Protocol from ``domain.interfaces.repositories``,
        e.g. ``tx.get_repository(FinancialRecordsRepository)``.
        """
        ...


#: Builds a fresh, unentered UnitOfWork. Concurrent tasks (one per compared
#: symbol) each take their own, since a session cannot be shared across tasks.
UnitOfWorkFactory = Callable[[], UnitOfWork]


async def run_in_uow(  # noqa: UP047
    uow: UnitOfWork,
    fn: Callable[[UnitOfWork], Awaitable[TResult]],
) -> TResult:
    """Run ``fn`` inside ``uow`` and commit when it returns.

    Any exception from ``fn`` rolls the scope back and propagates.
    """
    async with uow as tx:
        try:
            result = await fn(tx)
        except Exception:
            await tx.rollback()
            raise
        await tx.commit()
        return result


async def with_store_timeout(  # noqa: UP047
    awaitable: Awaitable[TResult],
    *,
    timeout_s: float,
    operation: str,
) -> TResult:
    """Await a store call bounded by ``timeout_s`` seconds.

    Raises:
        UpstreamTimeoutError: If the call does not complete in time.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_s)
    except TimeoutError as exc:
        raise UpstreamTimeoutError(
            f"Store operation '{operation}' timed out after {timeout_s}s.",
            details={"operation": operation, "timeout_s": timeout_s},
        ) from exc
