"""Three-way comparators used to order items inside a `SkipList`.

A comparator is any callable ``compare(a, b)`` returning a negative number
when *a* sorts before *b*, zero when both are equal and a positive number
otherwise (the same contract as the old ``cmp`` builtin). The container only
ever inspects the sign of the result.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

__all__ = [
    "Comparator",
    "LESS",
    "EQUAL",
    "GREATER",
    "sign",
    "ascending",
    "descending",
    "by_key",
    "resolve_comparator",
]

Comparator = Callable[[Any, Any], int]

LESS = -1
EQUAL = 0
GREATER = 1


def sign(value: int) -> int:
    """Collapse an arbitrary comparator result onto LESS / EQUAL / GREATER."""
    if value < 0:
        return LESS
    if value > 0:
        return GREATER
    return EQUAL


# ----------------------------------------------------------------------
# Stock comparators
# ----------------------------------------------------------------------
def ascending(a: Any, b: Any) -> int:
    """Natural order of the items (``<`` / ``>``)."""
    if a < b:
        return LESS
    if a > b:
        return GREATER
    return EQUAL


def descending(a: Any, b: Any) -> int:
    return ascending(b, a)


def by_key(key: Callable[[Any], Any], *, reverse: bool = False) -> Comparator:
    """Build a comparator ordering items by ``key(item)``, like `sorted(key=...)`."""

    def compare(a: Any, b: Any) -> int:
        ka, kb = key(a), key(b)
        return ascending(kb, ka) if reverse else ascending(ka, kb)

    return compare


def resolve_comparator(compare: Optional[Comparator]) -> Comparator:
    """Return *compare* itself, or `ascending` when it is None."""
    if compare is None:
        return ascending
    if not callable(compare):
        raise TypeError(f"comparator must be callable, got {type(compare).__name__}")
    return compare
