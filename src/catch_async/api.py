"""Public call surface.

Composition root for the default orchestrator (tenacity retry adapter plus the
package logging adapter) and the convenience wrappers built on it.
"""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

from catch_async.adapters.retry_tenacity import TenacityRetryAdapter
from catch_async.core.config import CatchAsyncOptions
from catch_async.core.managers.attempt_orchestrator import AttemptOrchestrator, Operation
from catch_async.core.models.result import CatchAsyncResult
from catch_async.core.settings import logger

T = TypeVar("T")

_orchestrator: Optional[AttemptOrchestrator] = None


def default_orchestrator() -> AttemptOrchestrator:
    """Return the shared orchestrator, building it on first use."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = AttemptOrchestrator(retry_port=TenacityRetryAdapter(), logger=logger)
    return _orchestrator


def _resolve_options(options: Optional[CatchAsyncOptions], overrides: dict[str, Any]) -> CatchAsyncOptions:
    if options is None:
        return CatchAsyncOptions(**overrides)
    return options.merged(**overrides)


async def catch_async(
    operation: Operation[T],
    options: Optional[CatchAsyncOptions] = None,
    **overrides: Any,
) -> CatchAsyncResult[T]:
    """Run `operation` with retries, timeout and hooks; never raise unless asked to.

    Args:
        operation: Zero-argument callable returning an awaitable (or a plain value).
        options: Prebuilt options; keyword `overrides` are merged over them.
    Returns:
        CatchAsyncResult with result/error/attempts/retried.
    Raises:
        The final transformed error when `rethrow=True` and every attempt failed.
        pydantic.ValidationError for invalid options.
    """
    resolved = _resolve_options(options, overrides)
    return await default_orchestrator().run(operation, resolved)


async def catch_async_value(
    operation: Operation[T],
    options: Optional[CatchAsyncOptions] = None,
    **overrides: Any,
) -> Optional[T]:
    """Like `catch_async` but return only the value (the default value on failure)."""
    outcome = await catch_async(operation, options, **overrides)
    return outcome.result


def catching(
    options: Optional[CatchAsyncOptions] = None,
    **overrides: Any,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[CatchAsyncResult[T]]]]:
    """Decorator form: the wrapped coroutine function returns a CatchAsyncResult.

    Options are validated once, when the decorator is applied.
    """
    resolved = _resolve_options(options, overrides)

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[CatchAsyncResult[T]]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> CatchAsyncResult[T]:
            return await default_orchestrator().run(functools.partial(func, *args, **kwargs), resolved)

        return wrapper

    return decorator
