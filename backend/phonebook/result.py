from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of one external call. Exactly one of value/error is meaningful:
    check `ok` before reading `value`.
    """

    ok: bool
    value: T | None = None
    error: Exception | None = None


def success(value: T | None = None) -> Result[T]:
    return Result(ok=True, value=value)


def failure(error: Exception) -> Result:
    return Result(ok=False, error=error)
