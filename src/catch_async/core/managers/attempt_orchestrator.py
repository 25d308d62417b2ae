"""AttemptOrchestrator: runs one fallible async operation under a retry/timeout envelope.

Responsibilities per invocation:
1. Invoke the operation, racing it against the per-attempt timeout if configured.
2. Transform every caught error and report it (logger hook, then on_error hook).
3. Decide whether to retry (should_retry predicate, capped at retry_count + 1 attempts).
4. Wait the fixed retry delay between attempts (delegated to the retry port).
5. Fire on_success / on_finally and build a CatchAsyncResult, or raise when rethrow is set.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar, Union

from catch_async.core.config import CatchAsyncOptions
from catch_async.core.exceptions import AttemptTimeoutError, OperationFailedError
from catch_async.core.interfaces.logging import LoggingPort
from catch_async.core.interfaces.retry import RetryPort
from catch_async.core.logging_config import call_id_var, new_call_id
from catch_async.core.models.result import CatchAsyncResult
from catch_async.core.settings import logger as default_logger
from catch_async.utils import maybe_await

T = TypeVar("T")

Operation = Callable[[], Union[Awaitable[T], T]]


class _FailedAttempt(Exception):
    """Carries the transformed error of a failed attempt through the retry port.

    Only the orchestrator raises and catches it, so hook failures and
    cancellation (anything else) are never retried.
    """

    def __init__(self, error: Any, retry: bool):
        self.error = error
        self.retry = retry
        super().__init__()


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, _FailedAttempt) and exc.retry


class AttemptOrchestrator:
    """Executes an operation with retries, per-attempt timeout and lifecycle hooks.

    Attributes:
        retry_port: Drives the attempt loop (attempt ceiling, fixed delay, retry predicate)
    """

    def __init__(
        self,
        retry_port: RetryPort,
        logger: Optional[LoggingPort] = None,
    ) -> None:
        self._retry = retry_port
        self._logger = logger or default_logger
        # Attempts abandoned on timeout keep running; hold references until they settle
        self._abandoned: Set[asyncio.Future] = set()

    async def run(
        self,
        operation: Operation[T],
        options: Optional[CatchAsyncOptions] = None,
    ) -> CatchAsyncResult[T]:
        """Run `operation` and return a structured result.

        Raises the final transformed error instead when `options.rethrow` is set
        and every attempt failed. Exceptions raised by hooks propagate unchanged.
        """
        options = options or CatchAsyncOptions()
        token = call_id_var.set(new_call_id())
        try:
            return await self._run(operation, options)
        finally:
            call_id_var.reset(token)

    async def _run(self, operation: Operation[T], options: CatchAsyncOptions) -> CatchAsyncResult[T]:
        attempts_made = 0

        async def attempt(attempt_number: int) -> T:
            nonlocal attempts_made
            attempts_made = attempt_number
            self._logger.debug(
                "[catch:attempt] start attempt=%s max_attempts=%s", attempt_number, options.max_attempts
            )
            try:
                return await self._invoke(operation, options, attempt_number)
            except Exception as exc:
                error = await self._handle_failure(exc, attempt_number, options)
                retry = await self._should_retry(error, attempt_number, options)
                if retry and attempt_number < options.max_attempts:
                    self._logger.debug(
                        "[catch:retry] attempt=%s failed, retrying in %ss err=%r",
                        attempt_number, options.retry_delay, error,
                    )
                raise _FailedAttempt(error, retry) from exc

        try:
            value = await self._retry.execute(
                attempt,
                attempts=options.max_attempts,
                delay=options.retry_delay,
                retry_on=_is_retryable,
            )
        except _FailedAttempt as failed:
            last_error = failed.error
        else:
            if options.on_success is not None:
                await maybe_await(options.on_success(value))
            if options.on_finally is not None:
                await maybe_await(options.on_finally())
            self._logger.debug("[catch:done] succeeded attempts=%s", attempts_made)
            return CatchAsyncResult.success(value, attempts_made)

        if options.on_finally is not None:
            await maybe_await(options.on_finally())
        self._logger.debug(
            "[catch:done] failed attempts=%s rethrow=%s err=%r", attempts_made, options.rethrow, last_error
        )

        if options.rethrow:
            if isinstance(last_error, BaseException):
                raise last_error
            raise OperationFailedError(last_error, attempts_made)

        return CatchAsyncResult.failure(last_error, attempts_made, options.default_value)

    async def _invoke(self, operation: Operation[T], options: CatchAsyncOptions, attempt_number: int) -> Any:
        """Invoke the operation once, racing it against the timeout if configured."""
        if options.timeout is None:
            return await maybe_await(operation())

        pending = asyncio.ensure_future(maybe_await(operation()))
        try:
            done, _ = await asyncio.wait({pending}, timeout=options.timeout)
        except asyncio.CancelledError:
            pending.cancel()
            raise

        if pending in done:
            return pending.result()

        # Stop waiting but leave the operation running; its outcome is discarded
        self._abandon(pending, attempt_number)
        raise AttemptTimeoutError(attempt_number, options.timeout)

    def _abandon(self, pending: asyncio.Future, attempt_number: int) -> None:
        self._logger.debug(
            "[catch:timeout] abandoning attempt=%s, operation keeps running", attempt_number
        )
        self._abandoned.add(pending)

        def _discard(fut: asyncio.Future) -> None:
            self._abandoned.discard(fut)
            if fut.cancelled():
                return
            # Retrieve the outcome so asyncio does not report it as never retrieved
            exc = fut.exception()
            if exc is not None:
                self._logger.debug(
                    "[catch:timeout] abandoned attempt=%s settled with err=%r", attempt_number, exc
                )

        pending.add_done_callback(_discard)

    async def _handle_failure(self, exc: Exception, attempt_number: int, options: CatchAsyncOptions) -> Any:
        """Transform the error, then report it: logger hook first, on_error second."""
        error: Any = exc
        if options.transform_error is not None:
            error = await maybe_await(options.transform_error(exc))
        if options.logger is not None:
            await maybe_await(options.logger(error, attempt_number))
        if options.on_error is not None:
            await maybe_await(options.on_error(error))
        return error

    async def _should_retry(self, error: Any, attempt_number: int, options: CatchAsyncOptions) -> bool:
        if options.should_retry is None:
            return attempt_number <= options.retry_count
        return bool(await maybe_await(options.should_retry(error, attempt_number)))

    @property
    def abandoned_count(self) -> int:
        """Number of timed-out attempts whose operation is still running."""
        return len(self._abandoned)
