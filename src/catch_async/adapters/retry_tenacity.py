from typing import Any, Awaitable, Callable
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_fixed, wait_none


def _retry_everything(exc: BaseException) -> bool:
    return isinstance(exc, Exception)


class TenacityRetryAdapter:
    """Tenacity-based retry adapter implementing RetryPort.

    Waits a fixed delay between attempts and supports async callables. Call-time
    kwargs override the default policy (attempts, delay, retry_on).
    """

    def __init__(
        self,
        attempts: int = 1,
        delay: float = 0.0,
        retry_on: Callable[[BaseException], bool] = _retry_everything,
    ) -> None:
        self.attempts = attempts
        self.delay = delay
        self.retry_on = retry_on

    def _retrying(self, attempts: int, delay: float, retry_on: Callable[[BaseException], bool]) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(delay) if delay > 0 else wait_none(),
            retry=retry_if_exception(retry_on),
            reraise=True,
        )

    async def execute(
        self,
        func: Callable[[int], Awaitable[Any]],
        *,
        attempts: int | None = None,
        delay: float | None = None,
        retry_on: Callable[[BaseException], bool] | None = None,
    ) -> Any:
        retrying = self._retrying(
            attempts if attempts is not None else self.attempts,
            delay if delay is not None else self.delay,
            retry_on if retry_on is not None else self.retry_on,
        )
        async for attempt in retrying:  # pragma: no cover - control flow instrumentation
            with attempt:
                return await func(attempt.retry_state.attempt_number)
