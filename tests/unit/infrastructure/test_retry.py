# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT

from __future__ import annotations

import pytest

from stocktracker_api.infrastructure.resilience.retry import (
    RetryPolicy,
    backoff_seconds,
    retry_async,
)

NO_WAIT = RetryPolicy(total=2, base=0.0, cap=0.0, jitter=False)


def test_backoff_is_exponential_and_capped() -> None:
    policy = RetryPolicy(total=5, base=0.5, cap=3.0, jitter=False)
    assert [backoff_seconds(policy, n) for n in range(4)] == [0.5, 1.0, 2.0, 3.0]


def test_jittered_backoff_stays_within_bound() -> None:
    policy = RetryPolicy(total=5, base=1.0, cap=4.0, jitter=True)
    for attempt in range(5):
        assert 0.0 <= backoff_seconds(policy, attempt) <= 4.0


@pytest.mark.anyio
async def test_first_success_makes_one_call() -> None:
    calls: list[int] = []

    async def _fn() -> str:
        calls.append(1)
        return "ok"

    assert (
        await retry_async(_fn, policy=NO_WAIT, retry_on=lambda o: isinstance(o, Exception)) == "ok"
    )
    assert len(calls) == 1


@pytest.mark.anyio
async def test_retryable_exception_is_retried_until_budget() -> None:
    attempts: list[int] = []

    async def _fn() -> str:
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        await retry_async(
            _fn,
            policy=NO_WAIT,
            retry_on=lambda o: isinstance(o, ConnectionError),
            on_retry=lambda attempt, _o: attempts.append(attempt),
        )
    assert attempts == [0, 1]


@pytest.mark.anyio
async def test_non_retryable_exception_propagates_immediately() -> None:
    calls: list[int] = []

    async def _fn() -> str:
        calls.append(1)
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        await retry_async(_fn, policy=NO_WAIT, retry_on=lambda o: isinstance(o, ConnectionError))
    assert len(calls) == 1


@pytest.mark.anyio
async def test_retryable_value_is_returned_when_budget_runs_out() -> None:
    async def _fn() -> int:
        return 503

    assert await retry_async(_fn, policy=NO_WAIT, retry_on=lambda o: o == 503) == 503
