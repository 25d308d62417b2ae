"""Configuration model for a single catch_async invocation.

One immutable Pydantic model carries every recognized option, so that
callers get validation up front and the orchestrator gets typed access.
"""

from typing import Any, Callable, Optional
from pydantic import BaseModel, Field


class CatchAsyncOptions(BaseModel):
    """Options controlling retries, timeouts and lifecycle hooks.

    Hooks may be plain functions or coroutine functions; awaitable return
    values are awaited before the orchestrator continues.

    Attributes:
        on_success: Called with the value of the attempt that succeeds
        on_error: Called with the transformed error of every failed attempt
        on_finally: Called once per invocation, after success/error hooks
        rethrow: Raise the final error instead of returning a result
        default_value: Placed into the result when all attempts fail
        logger: Called with (error, attempt_number) for every failed attempt
        retry_count: Retries allowed after the initial attempt
        retry_delay: Seconds to wait before each retry
        timeout: Per-attempt budget in seconds (None disables the timeout)
        transform_error: Maps every caught error before it is stored or reported
        should_retry: Decides after each failure whether to try again
    """

    on_success: Optional[Callable[[Any], Any]] = None
    on_error: Optional[Callable[[Any], Any]] = None
    on_finally: Optional[Callable[[], Any]] = None

    rethrow: bool = Field(
        default=False,
        description="Propagate the final error to the caller instead of returning a result"
    )

    default_value: Any = Field(
        default=None,
        description="Result value used when every attempt fails and rethrow is False"
    )

    logger: Optional[Callable[[Any, int], Any]] = None

    retry_count: int = Field(
        default=0,
        ge=0,
        description="Maximum number of retries after the initial attempt"
    )

    retry_delay: float = Field(
        default=0.0,
        ge=0,
        description="Seconds to wait before each retry attempt"
    )

    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-attempt wall-clock budget in seconds (None for no timeout)"
    )

    transform_error: Optional[Callable[[Any], Any]] = None
    should_retry: Optional[Callable[[Any, int], Any]] = None

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @property
    def max_attempts(self) -> int:
        return self.retry_count + 1

    @property
    def has_default_value(self) -> bool:
        """True if `default_value` was given explicitly, even if given as None."""
        return "default_value" in self.model_fields_set

    def merged(self, **overrides: Any) -> "CatchAsyncOptions":
        """Return a validated copy with `overrides` applied.

        `model_copy(update=...)` skips validation, so the fields are rebuilt
        through the constructor instead. Explicitly set fields stay explicit.
        """
        if not overrides:
            return self
        values = {name: getattr(self, name) for name in self.model_fields_set}
        values.update(overrides)
        return type(self)(**values)
