from typing import Protocol, Any, Awaitable, Callable

class RetryPort(Protocol):
    """Abstract retry interface for async attempts.

    Implementations run an attempt function repeatedly with a fixed wait in
    between. The contract keeps the orchestrator decoupled from a specific
    retry library (tenacity/backoff).
    """
    async def execute(
        self,
        func: Callable[[int], Awaitable[Any]],
        *,
        attempts: int | None = None,
        delay: float | None = None,
        retry_on: Callable[[BaseException], bool] | None = None,
    ) -> Any:  # pragma: no cover - protocol
        """Execute an attempt function with retry semantics.

        Args:
            func: Async callable receiving the attempt number (counted from 1).
            attempts: Maximum number of calls to `func`.
            delay: Seconds to wait between calls.
            retry_on: Predicate deciding whether a raised exception is retried.
        Returns:
            Result of the first call that returns.
        Raises:
            Propagates the last exception unchanged once retrying stops.
        """
        ...
