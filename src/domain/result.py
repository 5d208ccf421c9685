"""Explicit success/failure wrapper for data-fetch operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a value or the exception that prevented producing it.

    Callers decide whether to degrade or surface the error; nothing is
    substituted on their behalf.
    """

    value: T | None = None
    error: Exception | None = None
    key: object | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, *, key: object | None = None) -> FetchResult[T]:
        return cls(value=value, key=key)

    @classmethod
    def failure(cls, error: Exception, *, key: object | None = None) -> FetchResult[T]:
        return cls(error=error, key=key)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["FetchResult"]
