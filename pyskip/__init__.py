"""pyskip: an in-memory ordered skip list for building ordered indexes.

The package exposes a single container, `pyskip.SkipList`, ordered by a
caller-supplied three-way comparator, plus a handful of stock comparators
(`ascending`, `descending`, `by_key`) and the tower height sampler used by
the container.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "LevelGenerator",
    "Comparator",
    "ascending",
    "descending",
    "by_key",
]

from .comparator import Comparator, ascending, by_key, descending
from .level import LevelGenerator
from .skiplist import SkipList
