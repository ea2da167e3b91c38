"""Tagged data-or-error results for the controller boundary."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from stockfolio.core.exceptions import AppError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a user-facing operation.

    Exactly one of data/error is meaningful: on success `error` is None
    (data may still be None for operations with nothing to return); on
    failure `error` holds the ErrorKind and `message` the readable text.
    """

    data: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, exc: AppError) -> "Result[T]":
        return cls(error=exc.code, message=exc.message)


def capture(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """
    Run func and wrap its outcome in a Result.

    Only AppError is converted; anything else (I/O, network) propagates
    to the top-level caller.
    """
    try:
        return Result.ok(func(*args, **kwargs))
    except AppError as exc:
        return Result.failure(exc)
