"""Result type for explicit error handling.

Every fallible operation in relsync returns ``Ok(value)`` or ``Err(error)``
instead of raising, so each pipeline stage can hand its failure to the
next layer untouched.

Usage:
    match read_version(path):
        case Ok(version):
            print(version)
        case Err(error):
            print(error.reason)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Wrap or translate the error, e.g. to attach the failing stage."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
