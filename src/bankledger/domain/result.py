"""Result values returned by account and ledger operations."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from bankledger.domain.errors import DomainError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: either a value or a domain error.

    Operations hand failures back to the caller instead of raising, so a
    rejected withdrawal or a missing account never unwinds through the
    ledger. ``unwrap`` is available for callers that prefer exceptions.
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind

    def unwrap(self) -> T:
        """Return the value, raising the held error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
