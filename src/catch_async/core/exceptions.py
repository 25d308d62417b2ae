from typing import Any


class CatchAsyncError(Exception):
    """Base exception for errors raised by catch_async itself."""


class AttemptTimeoutError(CatchAsyncError, TimeoutError):
    """Raised when a single attempt exceeds its configured timeout.

    The wrapped operation is not cancelled; the orchestrator only stops
    waiting on it.

    Attributes:
        attempt: Attempt number (counted from 1) that timed out
        timeout: Configured per-attempt timeout in seconds
    """
    def __init__(self, attempt: int, timeout: float):
        self.attempt = attempt
        self.timeout = timeout
        super().__init__(f"Attempt {attempt} timed out after {timeout}s")


class OperationFailedError(CatchAsyncError):
    """Raised on rethrow when the final error is not an exception instance.

    `transform_error` may map failures to arbitrary values; those cannot be
    raised directly, so they travel on this wrapper instead.

    Attributes:
        error: The final (transformed) error value
        attempts: Number of attempts made
    """
    def __init__(self, error: Any, attempts: int):
        self.error = error
        self.attempts = attempts
        super().__init__(f"Operation failed after {attempts} attempt(s): {error!r}")
