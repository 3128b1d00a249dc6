"""Thread-safe ordered skip list keyed by a caller-supplied comparator.

Items are opaque: the container never looks at them except through the
three-way comparator handed to the constructor. Duplicates (per comparator)
are rejected, so the list behaves like an ordered set.

Layout:

    header ─────────────────────────────► 7 ──► None      level 2
    header ──────────► 3 ───────────────► 7 ──► None      level 1
    header ──► 1 ──► 3 ──► 4 ──► 5 ──► 7 ──► None      level 0
           ◄──   ◄──   ◄──   ◄──   ◄──                   (backward, level 0 only)

Complexities (average case):
    • exists   – O(log n)
    • insert   – O(log n)
    • delete   – O(log n)
    • len      – O(1)
    • iterate  – O(n)

Every public call holds a single `threading.Lock` for its whole duration, so
at most one operation of any kind runs at a time. Node objects never leave
the container; traversal hands out items only.
"""
from __future__ import annotations

import logging
import random
import threading
from collections.abc import Iterable, Iterator
from typing import Generic, Optional, TypeVar

from .comparator import EQUAL, LESS, Comparator, resolve_comparator, sign
from .level import MAX_LEVEL, P, LevelGenerator

__all__ = ["SkipList"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("item", "forward", "backward")

    def __init__(self, item: Optional[T], height: int):
        self.item = item
        self.forward: list[Optional[_Node[T]]] = [None] * height
        self.backward: Optional[_Node[T]] = None  # level 0 only

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.item!r}:{len(self.forward)}>"


class SkipList(Generic[T]):
    """Ordered set of items backed by a probabilistic skip list.

    Parameters
    ----------
    compare: Comparator | None
        Three-way comparator ``compare(a, b) -> int``; defaults to natural
        ascending order. Must be a total order.
    rng: random.Random | None
        Random source used for tower heights. Owned by this instance.
    seed: int | None
        Seed for a private `random.Random` (mutually exclusive with *rng*).
    max_level: int
        Tower height cap for new nodes, 1..32.
    p: float
        Promotion probability per coin flip.
    """

    def __init__(
        self,
        compare: Optional[Comparator] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_level: int = MAX_LEVEL,
        p: float = P,
    ) -> None:
        self._compare = resolve_comparator(compare)
        self._random_level = LevelGenerator(
            rng=rng, seed=seed, max_level=max_level, p=p
        )
        self._header: _Node[T] = _Node(None, MAX_LEVEL)
        self._level = 0  # highest populated level index
        self._length = 0
        self._lock = threading.Lock()
        logger.debug(
            "created skip list ordered by %r (max_level=%d, p=%s)",
            getattr(self._compare, "__name__", self._compare),
            max_level,
            p,
        )

    # ---------------------------------------------------------------------
    # Search
    # ---------------------------------------------------------------------
    def _find(self, item: T, top: int) -> tuple[list[_Node[T]], bool]:
        """Walk from level *top* down to 0 collecting predecessors of *item*.

        Returns ``(update, found)`` where ``update[i]`` is the rightmost node
        at level *i* whose item sorts strictly before *item* (the header when
        there is none) and *found* tells whether the node right after
        ``update[0]`` equals *item*.
        """
        update: list[_Node[T]] = [self._header] * (top + 1)
        compare = self._compare
        found = False
        x = self._header
        for i in reversed(range(top + 1)):
            while (nxt := x.forward[i]) is not None:
                order = sign(compare(nxt.item, item))
                if order == LESS:
                    x = nxt
                    continue
                found = order == EQUAL
                break
            else:
                found = False
            update[i] = x
        return update, found

    def _last(self) -> Optional[_Node[T]]:
        x = self._header
        for i in reversed(range(self._level + 1)):
            while (nxt := x.forward[i]) is not None:
                x = nxt
        return None if x is self._header else x

    def _predecessor(
        self, target: _Node[T], i: int, start: _Node[T]
    ) -> Optional[_Node[T]]:
        """Node linking to *target* at level *i*, matched by identity.

        Scans forward from *start* (the walk's predecessor, so normally one
        hop) and falls back to a scan from the header, which only an
        inconsistent comparator makes necessary.
        """
        for x in (start, self._header):
            while (nxt := x.forward[i]) is not None:
                if nxt is target:
                    return x
                x = nxt
        return None

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def insert(self, item: T) -> bool:
        """Add *item*; return False (and change nothing) if it is already present."""
        with self._lock:
            lvl = self._random_level()
            # Levels above self._level are empty, so their predecessor is the header.
            update, found = self._find(item, max(self._level, lvl))
            if found:
                return False
            node: _Node[T] = _Node(item, lvl + 1)
            for i in range(lvl + 1):
                pred = update[i]
                node.forward[i] = pred.forward[i]
                pred.forward[i] = node
            node.backward = update[0]
            if (succ := node.forward[0]) is not None:
                succ.backward = node
            if lvl > self._level:
                logger.debug("skip list level raised %d -> %d", self._level, lvl)
                self._level = lvl
            self._length += 1
            return True

    def insert_many(self, items: Iterable[T]) -> int:
        """Insert every item in *items*; return how many were new."""
        return sum(1 for item in items if self.insert(item))

    def delete(self, item: T) -> bool:
        """Remove *item*; return False (and change nothing) if it is absent."""
        with self._lock:
            update, found = self._find(item, self._level)
            if not found:
                return False
            target = update[0].forward[0]
            assert target is not None
            preds: list[_Node[T]] = []
            for i in range(len(target.forward)):
                start = update[i] if i < len(update) else self._header
                pred = self._predecessor(target, i, start)
                if pred is None:
                    return False
                preds.append(pred)
            # Towers are unlinked whole or not at all.
            for i, pred in enumerate(preds):
                pred.forward[i] = target.forward[i]
            if (succ := target.forward[0]) is not None:
                succ.backward = update[0]
            # Removing a tall node can empty several top levels at once.
            top = self._level
            while self._level > 0 and self._header.forward[self._level] is None:
                self._level -= 1
            if self._level != top:
                logger.debug("skip list level collapsed %d -> %d", top, self._level)
            self._length -= 1
            return True

    def clear(self) -> None:
        with self._lock:
            self._header.forward = [None] * MAX_LEVEL
            self._level = 0
            self._length = 0
            logger.debug("skip list cleared")

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def exists(self, item: T) -> bool:
        with self._lock:
            compare = self._compare
            x = self._header
            for i in reversed(range(self._level + 1)):
                while (nxt := x.forward[i]) is not None:
                    order = sign(compare(nxt.item, item))
                    if order == EQUAL:
                        return True
                    if order != LESS:
                        break
                    x = nxt
            return False

    def __contains__(self, item: object) -> bool:
        return self.exists(item)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return self._length

    def __bool__(self) -> bool:
        return len(self) > 0

    @property
    def max_level(self) -> int:
        return self._random_level.max_level

    @property
    def level(self) -> int:
        """Index of the highest populated level (0 when empty)."""
        with self._lock:
            return self._level

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[T]:
        """Yield items in comparator order.

        Each step takes the lock on its own, so mutating the list while
        iterating is allowed; the iterator then may or may not observe the
        changes but always terminates.
        """
        with self._lock:
            node = self._header.forward[0]
        while node is not None:
            yield node.item  # type: ignore[misc]
            with self._lock:
                node = node.forward[0]

    def __reversed__(self) -> Iterator[T]:
        """Yield items in reverse comparator order, following backward links."""
        with self._lock:
            node = self._last()
        while node is not None:
            yield node.item  # type: ignore[misc]
            with self._lock:
                prev = node.backward
            node = None if prev is self._header else prev

    def __repr__(self) -> str:
        return f"SkipList({list(self)!r})"
