# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Bounded async retries with exponential, optionally jittered, backoff.

``retry_on`` sees either the exception raised by an attempt or the value it
returned, so callers can retry on a status code without raising first.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many extra attempts to make and how long to wait between them.

    Attributes:
        total: Retries after the first attempt. ``0`` disables retrying.
        base: Delay in seconds before the first retry; doubles each time.
        cap: Longest single delay in seconds.
        jitter: Draw each delay uniformly from ``[0, delay]``.
    """

    total: int
    base: float
    cap: float
    jitter: bool = True


def backoff_seconds(policy: RetryPolicy, attempt: int) -> float:
    delay = min(policy.cap, policy.base * 2**attempt)
    return random.uniform(0.0, delay) if policy.jitter else delay  # noqa: S311


async def retry_async(  # noqa: UP047
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    retry_on: Callable[[Exception | T], bool],
    on_retry: Callable[[int, Exception | T], None] | None = None,
) -> T:
    """Call ``fn`` until it succeeds, is not retryable, or the budget is spent.

    Once the budget is spent the last outcome wins: a retryable exception is
    re-raised and a retryable value is returned as is.
    """
    for attempt in range(policy.total + 1):
        last_try = attempt == policy.total
        outcome: Exception | T
        try:
            outcome = await fn()
        except Exception as exc:
            if last_try or not retry_on(exc):
                raise
            outcome = exc
        else:
            if last_try or not retry_on(outcome):
                return outcome

        if on_retry is not None:
            on_retry(attempt, outcome)
        await asyncio.sleep(backoff_seconds(policy, attempt))

    raise AssertionError("unreachable")  # pragma: no cover
