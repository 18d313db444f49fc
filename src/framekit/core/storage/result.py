"""Result type returned by storage backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful storage operation."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed storage operation with a human readable reason."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]

__all__ = ["Err", "Ok", "Result"]
