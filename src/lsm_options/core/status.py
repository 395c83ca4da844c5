"""Typed outcomes returned by the tokenizer, converters and appliers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .errors import InvalidArgumentError, NotSupportedError, OptionsError

T = TypeVar("T")
U = TypeVar("U")


class StatusCode(Enum):
    OK = "OK"
    INVALID_ARGUMENT = "Invalid argument"
    NOT_SUPPORTED = "Not implemented"


@dataclass(frozen=True)
class Status:
    """Outcome code plus a human-readable message.

    The string form mirrors what the storage engine prints, e.g.
    ``Invalid argument: Unrecognized option: foo``.
    """

    code: StatusCode = StatusCode.OK
    message: str = ""

    @classmethod
    def ok(cls) -> Status:
        return cls()

    @classmethod
    def invalid_argument(cls, message: str) -> Status:
        return cls(StatusCode.INVALID_ARGUMENT, message)

    @classmethod
    def not_supported(cls, message: str) -> Status:
        return cls(StatusCode.NOT_SUPPORTED, message)

    @property
    def is_ok(self) -> bool:
        return self.code is StatusCode.OK

    def is_invalid_argument(self) -> bool:
        return self.code is StatusCode.INVALID_ARGUMENT

    def is_not_supported(self) -> bool:
        return self.code is StatusCode.NOT_SUPPORTED

    def to_exception(self) -> OptionsError:
        """Return the exception matching this status (never raised here)."""
        if self.code is StatusCode.NOT_SUPPORTED:
            return NotSupportedError(self.message, self)
        if self.code is StatusCode.INVALID_ARGUMENT:
            return InvalidArgumentError(self.message, self)
        return OptionsError(self.message, self)

    def __str__(self) -> str:
        if self.is_ok:
            return "OK"
        return f"{self.code.value}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """A status and, when it is OK, the produced value.

    Failed applier results still carry the partially-applied record in
    ``value``; earlier keys are not rolled back.
    """

    status: Status
    value: T | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(Status.ok(), value)

    @classmethod
    def failure(cls, status: Status, value: T | None = None) -> Result[T]:
        return cls(status, value)

    @classmethod
    def invalid(cls, message: str) -> Result[T]:
        return cls(Status.invalid_argument(message))

    @property
    def ok(self) -> bool:
        return self.status.is_ok

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Apply fn to a successful value; failures pass through."""
        if not self.status.is_ok:
            return Result(self.status)
        return Result.success(fn(self.value))  # type: ignore[arg-type]

    def unwrap(self) -> T:
        """Return the value, or raise the error matching the status."""
        if not self.status.is_ok:
            raise self.status.to_exception()
        return self.value  # type: ignore[return-value]
