"""Result type for explicit error handling.

Every step of a distribution run returns either ``Ok(value)`` or
``Err(error)``. Callers branch on the variant instead of catching
exceptions, which keeps the fail-fast sequencing visible in the code.

Usage:
    match resolve_files("build/*.apk", cwd=root):
        case Ok(files):
            print(f"{len(files)} file(s)")
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
