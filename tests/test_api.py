"""Tests for the public call surface: option merging, value adapter and decorator."""

import inspect

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, Mock

from catch_async.api import catch_async, catch_async_value, catching, default_orchestrator
from catch_async.core.config import CatchAsyncOptions
from catch_async.core.models.result import CatchAsyncResult


# --- catch_async ---

@pytest.mark.asyncio
async def test_accepts_prebuilt_options():
    op = AsyncMock(side_effect=[ValueError("a"), "ok"])

    outcome = await catch_async(op, CatchAsyncOptions(retry_count=1))

    assert outcome.result == "ok"
    assert outcome.attempts == 2


@pytest.mark.asyncio
async def test_keyword_overrides_are_merged_over_options():
    op = AsyncMock(side_effect=ValueError("x"))
    on_error = Mock()

    outcome = await catch_async(op, CatchAsyncOptions(retry_count=3, on_error=on_error), retry_count=1)

    assert op.call_count == 2
    assert on_error.call_count == 2
    assert outcome.attempts == 2


@pytest.mark.asyncio
async def test_invalid_options_raise_before_running_operation():
    op = AsyncMock()

    with pytest.raises(ValidationError):
        await catch_async(op, retry_count=-1)

    op.assert_not_called()


def test_default_orchestrator_is_shared():
    assert default_orchestrator() is default_orchestrator()


# --- catch_async_value ---

@pytest.mark.asyncio
async def test_value_adapter_returns_plain_value():
    assert await catch_async_value(AsyncMock(return_value="v")) == "v"


@pytest.mark.asyncio
async def test_value_adapter_returns_default_value_on_failure():
    value = await catch_async_value(AsyncMock(side_effect=ValueError("x")), default_value="fallback")

    assert value == "fallback"


@pytest.mark.asyncio
async def test_value_adapter_returns_none_without_default_value():
    assert await catch_async_value(AsyncMock(side_effect=ValueError("x"))) is None


@pytest.mark.asyncio
async def test_value_adapter_rethrows():
    with pytest.raises(ValueError, match="boom"):
        await catch_async_value(AsyncMock(side_effect=ValueError("boom")), rethrow=True)


# --- catching decorator ---

@pytest.mark.asyncio
async def test_decorator_binds_call_arguments():
    calls = []

    @catching(retry_count=1)
    async def fetch(key, *, scale=1):
        calls.append((key, scale))
        if len(calls) == 1:
            raise ConnectionError("flaky")
        return key * scale

    outcome = await fetch("ab", scale=2)

    assert isinstance(outcome, CatchAsyncResult)
    assert outcome.result == "abab"
    assert outcome.attempts == 2
    assert calls == [("ab", 2), ("ab", 2)]


@pytest.mark.asyncio
async def test_decorator_preserves_function_metadata():
    @catching()
    async def documented():
        """Docstring kept."""
        return 1

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring kept."
    assert (await documented()).result == 1


def test_decorator_validates_options_when_applied():
    with pytest.raises(ValidationError):
        catching(timeout=0)


def test_public_functions_carry_the_result_type():
    assert inspect.signature(catch_async).return_annotation == "CatchAsyncResult[T]"
    assert inspect.signature(catch_async_value).return_annotation == "Optional[T]"
    assert CatchAsyncResult.success.__annotations__["return"] == "CatchAsyncResult[T]"
    assert CatchAsyncResult.failure.__annotations__["return"] == "CatchAsyncResult[T]"
