from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class CatchAsyncResult(BaseModel, Generic[T]):
    """Outcome of one catch_async invocation.

    On success `error` is None. On a swallowed failure `error` holds the final
    transformed error and `result` holds the configured default value (None if
    none was given). `succeeded` tells the two apart even when a transformed
    error is itself None.
    """

    result: Optional[T] = None
    error: Any = None
    attempts: int = Field(ge=1, description="Number of times the operation was invoked")
    retried: bool = Field(description="True if more than one attempt was made")
    succeeded: bool = False

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @model_validator(mode="after")
    def _check_retried(self) -> "CatchAsyncResult[T]":
        if self.retried != (self.attempts > 1):
            raise ValueError(
                f"retried={self.retried} is inconsistent with attempts={self.attempts}"
            )
        return self

    @classmethod
    def success(cls, value: T, attempts: int) -> "CatchAsyncResult[T]":
        return cls(
            result=value,
            error=None,
            attempts=attempts,
            retried=attempts > 1,
            succeeded=True,
        )

    @classmethod
    def failure(cls, error: Any, attempts: int, default_value: Optional[T] = None) -> "CatchAsyncResult[T]":
        return cls(
            result=default_value,
            error=error,
            attempts=attempts,
            retried=attempts > 1,
            succeeded=False,
        )
