"""Unit tests for the tower height sampler."""
import random
from collections import Counter

import pytest

from pyskip.level import MAX_LEVEL, LevelGenerator


class ConstantRandom(random.Random):
    """Random source whose `random()` always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self._value = value

    def random(self):
        return self._value


def test_always_heads_hits_the_cap():
    """Unbounded success streaks are clipped to the top level."""
    gen = LevelGenerator(rng=ConstantRandom(0.0))
    assert gen() == MAX_LEVEL - 1
    assert gen.max_level == MAX_LEVEL


def test_always_tails_stays_on_base_level():
    gen = LevelGenerator(rng=ConstantRandom(0.99))
    assert gen() == 0


def test_custom_cap():
    gen = LevelGenerator(rng=ConstantRandom(0.0), max_level=4)
    assert gen() == 3


def test_geometric_distribution():
    """Roughly half the towers stop at each level."""
    gen = LevelGenerator(seed=11)
    n = 40_000
    counts = Counter(gen() for _ in range(n))
    assert all(0 <= lvl < MAX_LEVEL for lvl in counts)
    assert counts[0] / n == pytest.approx(0.5, abs=0.02)
    assert counts[1] / n == pytest.approx(0.25, abs=0.02)
    assert counts[2] / n == pytest.approx(0.125, abs=0.02)


def test_seed_is_reproducible():
    a = LevelGenerator(seed=5)
    b = LevelGenerator(seed=5)
    assert [a() for _ in range(1000)] == [b() for _ in range(1000)]


def test_instances_do_not_share_state():
    """Drawing from one generator does not shift another's sequence."""
    a = LevelGenerator(seed=5)
    b = LevelGenerator(seed=5)
    expected = [b() for _ in range(100)]
    other = LevelGenerator(seed=5)
    for _ in range(50):
        other()
    assert [a() for _ in range(100)] == expected


@pytest.mark.parametrize(
    "kwargs, exc",
    [
        ({"rng": random.Random(1), "seed": 1}, ValueError),
        ({"rng": object()}, TypeError),
        ({"max_level": 0}, ValueError),
        ({"max_level": MAX_LEVEL + 1}, ValueError),
        ({"p": 0.0}, ValueError),
        ({"p": 1.0}, ValueError),
    ],
)
def test_bad_arguments(kwargs, exc):
    with pytest.raises(exc):
        LevelGenerator(**kwargs)
