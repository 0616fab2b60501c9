"""Explicit success/failure containers for calls that must not raise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]


def unwrap_or_else(result: Result[T, E], recover: Callable[[E], T]) -> T:
    """Return the success value, or the value produced by ``recover`` for an error."""

    if isinstance(result, Ok):
        return result.value
    return recover(result.error)


__all__ = ["Err", "Ok", "Result", "unwrap_or_else"]
