"""Thread-safety tests: every operation runs under the container lock."""
from concurrent.futures import ThreadPoolExecutor

import pytest

from pyskip import SkipList


def _run(*jobs):
    """Run each job on its own worker; re-raise anything a worker raised."""
    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        futures = [pool.submit(fn, *args) for fn, *args in jobs]
        return [f.result() for f in futures]


def test_worker_failures_reach_the_test():
    """An assertion inside a worker fails the calling test."""
    sl = SkipList(seed=0)

    def broken():
        assert list(sl) == ["never"]

    with pytest.raises(AssertionError):
        _run((broken,))


def test_concurrent_inserts():
    """Disjoint writers all land, in order."""
    sl = SkipList(seed=1)
    per_thread = 500

    def writer(base):
        for i in range(per_thread):
            assert sl.insert(base + i)

    _run(*[(writer, n * per_thread) for n in range(8)])

    assert len(sl) == 8 * per_thread
    assert list(sl) == list(range(8 * per_thread))


def test_racing_duplicate_inserts():
    """Exactly one thread wins each duplicate race."""
    sl = SkipList(seed=2)

    def writer():
        return sum(1 for i in range(1000) if sl.insert(i))

    wins = _run(*[(writer,) for _ in range(6)])

    assert sum(wins) == 1000
    assert len(sl) == 1000


def test_concurrent_mixed_operations():
    """Readers, writers and deleters interleave without corrupting the list."""
    sl = SkipList(seed=3)
    sl.insert_many(range(0, 2000, 2))  # evens

    def deleter():
        for i in range(0, 2000, 4):
            assert sl.delete(i)

    def inserter():
        for i in range(1, 2000, 2):
            assert sl.insert(i)

    def reader():
        for _ in range(5):
            items = list(sl)
            assert all(a < b for a, b in zip(items, items[1:]))
            for i in range(2, 2000, 4):
                assert sl.exists(i)

    _run((deleter,), (inserter,), (reader,), (reader,))

    expected = sorted(set(range(2000)) - set(range(0, 2000, 4)))
    assert list(sl) == expected
    assert list(reversed(sl)) == expected[::-1]
    assert len(sl) == len(expected)
