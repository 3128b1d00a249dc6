"""Randomized tower heights for new skip-list nodes.

Heights follow the classic 50 % branching factor: a fair coin is flipped
until it comes up tails, each heads promoting the node one level. Levels are
0-based, so a node sampled at level *k* owns ``k + 1`` forward links and

    P(level = k) = (1/2) ** (k + 1)

for every *k* below the cap. Each container owns its generator (and thus its
own `random.Random`), which keeps test runs reproducible via ``seed``.
"""
from __future__ import annotations

import random
from typing import Optional

__all__ = ["LevelGenerator", "MAX_LEVEL", "P"]

MAX_LEVEL = 32  # Tower height cap; header is allocated with this many links.
P = 0.5


class LevelGenerator:
    """Sample the top level index of a freshly inserted node."""

    __slots__ = ("_rng", "_max_level", "_p")

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_level: int = MAX_LEVEL,
        p: float = P,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        if rng is not None and not isinstance(rng, random.Random):
            raise TypeError(
                f"rng must be a random.Random, got {type(rng).__name__}"
            )
        if not 1 <= max_level <= MAX_LEVEL:
            raise ValueError(
                f"max_level must be within 1..{MAX_LEVEL}, got {max_level}"
            )
        if not 0.0 < p < 1.0:
            raise ValueError(f"p must be within (0, 1), got {p}")
        self._rng = rng if rng is not None else random.Random(seed)
        self._max_level = max_level
        self._p = p

    @property
    def max_level(self) -> int:
        return self._max_level

    def __call__(self) -> int:
        lvl = 0
        top = self._max_level - 1
        while lvl < top and self._rng.random() < self._p:
            lvl += 1
        return lvl

    def __repr__(self) -> str:  # pragma: no cover
        return f"LevelGenerator(max_level={self._max_level}, p={self._p})"
