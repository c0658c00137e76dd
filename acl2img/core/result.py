"""Result type for explicit error handling.

Every release step returns either ``Ok(value)`` or ``Err(error)`` instead of
raising, so the assembler can stop at the first failure and the CLI can map
the error to an exit code in one place.

Usage:
    match parse_digest(text):
        case Ok(digest):
            print(f"digest: {digest}")
        case Err(error):
            print(f"error: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
