"""Outcome type returned by the service layer.

Every service operation returns a :class:`Result` holding either a value or
exactly one :class:`ServiceError`. Transport adapters translate the error kind
into their own status vocabulary with an exhaustive lookup, so an outcome can
never fall through unmapped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Kinds of failure a caller can observe."""

    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"
    UNAUTHENTICATED = "unauthenticated"  # reserved for token checks


@dataclass(frozen=True, slots=True)
class ServiceError:
    """A tagged failure with a human-readable message."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class ServiceFailure(Exception):
    """Raised by :meth:`Result.unwrap` on a failed result."""

    def __init__(self, error: ServiceError) -> None:
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a successful value or a single error.

    Example:
        >>> Result.success(3).unwrap()
        3
        >>> Result.failure(ErrorKind.NOT_FOUND, "post not found").ok
        False
    """

    value: T | None = None
    error: ServiceError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> Result[T]:
        return cls(error=ServiceError(kind, message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising :class:`ServiceFailure` on error."""
        if self.error is not None:
            raise ServiceFailure(self.error)
        return self.value  # type: ignore[return-value]
