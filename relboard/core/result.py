"""Result type for explicit error handling.

Fallible steps (running the changelog helper, parsing its payload, loading
config) return a Result instead of raising, so failures travel up to the CLI
as values and are reported exactly once.

Usage:
    match fetch_pair(source, ids, token):
        case Ok((left, right)):
            ...
        case Err(error):
            console.error(error.summary)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Wrap the error, e.g. a parse message into a FetchError."""
        return Err(f(self.error))


type Result[T, E] = Ok[T] | Err[E]
