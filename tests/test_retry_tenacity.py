import asyncio
import pytest
from unittest.mock import AsyncMock

from catch_async.adapters.retry_tenacity import TenacityRetryAdapter

"""
Tests for TenacityRetryAdapter behavior.

The adapter owns the attempt loop only: it calls the attempt function with
its attempt number, stops at the attempt ceiling or when the retry predicate
declines, waits a fixed delay in between, and reraises the last exception
unchanged (never tenacity's RetryError).
"""


@pytest.mark.asyncio
async def test_returns_first_successful_result_with_attempt_numbers():
    seen = []

    async def func(attempt_number):
        seen.append(attempt_number)
        if attempt_number < 3:
            raise ValueError(f"fail-{attempt_number}")
        return "done"

    adapter = TenacityRetryAdapter(attempts=5)

    assert await adapter.execute(func) == "done"
    assert seen == [1, 2, 3]


@pytest.mark.asyncio
async def test_reraises_last_exception_when_attempts_exhausted():
    errors = [ValueError("one"), ValueError("two"), ValueError("three")]
    func = AsyncMock(side_effect=errors)

    with pytest.raises(ValueError) as excinfo:
        await TenacityRetryAdapter(attempts=3).execute(func)

    assert excinfo.value is errors[-1]
    assert func.call_count == 3


@pytest.mark.asyncio
async def test_retry_predicate_stops_immediately():
    func = AsyncMock(side_effect=KeyError("not retryable"))

    with pytest.raises(KeyError):
        await TenacityRetryAdapter(attempts=5).execute(
            func, retry_on=lambda exc: not isinstance(exc, KeyError)
        )

    assert func.call_count == 1


@pytest.mark.asyncio
async def test_call_time_overrides_take_precedence():
    func = AsyncMock(side_effect=ValueError("x"))
    adapter = TenacityRetryAdapter(attempts=5, delay=10.0)

    with pytest.raises(ValueError):
        await adapter.execute(func, attempts=2, delay=0)

    assert func.call_count == 2


@pytest.mark.asyncio
async def test_waits_fixed_delay_between_attempts():
    loop = asyncio.get_running_loop()
    func = AsyncMock(side_effect=[ValueError("a"), ValueError("b"), "ok"])

    started = loop.time()
    result = await TenacityRetryAdapter(attempts=3, delay=0.02).execute(func)

    assert result == "ok"
    assert loop.time() - started >= 0.035


@pytest.mark.asyncio
async def test_default_policy_is_single_attempt():
    func = AsyncMock(side_effect=ValueError("x"))

    with pytest.raises(ValueError):
        await TenacityRetryAdapter().execute(func)

    assert func.call_count == 1


@pytest.mark.asyncio
async def test_base_exceptions_are_not_retried_by_default():
    func = AsyncMock(side_effect=asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        await TenacityRetryAdapter(attempts=3).execute(func)

    assert func.call_count == 1
