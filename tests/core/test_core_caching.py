"""
Tests for core.caching — identity-keyed memo.
"""

import threading

import pytest

from core.caching import CacheStats, IdentityMemo


class _Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.calls


# ══════════════════════════════════════════════════════════════
# IdentityMemo
# ══════════════════════════════════════════════════════════════

class TestIdentityMemo:
    def test_same_objects_hit(self):
        memo = IdentityMemo()
        compute = _Counter()
        a, b = [1], [2]
        assert memo.get_or_compute((a, b), compute) == 1
        assert memo.get_or_compute((a, b), compute) == 1
        assert compute.calls == 1
        assert memo.stats.hits == 1
        assert memo.stats.misses == 1

    def test_equal_but_distinct_objects_miss(self):
        memo = IdentityMemo()
        compute = _Counter()
        memo.get_or_compute(([1],), compute)
        memo.get_or_compute(([1],), compute)
        assert compute.calls == 2

    def test_replacing_one_collection_recomputes(self):
        memo = IdentityMemo()
        compute = _Counter()
        sales, purchases = [], []
        memo.get_or_compute((sales, purchases), compute)
        memo.get_or_compute((sales, []), compute)
        assert compute.calls == 2

    def test_lru_eviction(self):
        memo = IdentityMemo(max_size=2)
        compute = _Counter()
        a, b, c = [], [], []
        memo.get_or_compute((a,), compute)
        memo.get_or_compute((b,), compute)
        memo.get_or_compute((a,), compute)   # a is now most recent
        memo.get_or_compute((c,), compute)   # evicts b
        assert memo.size == 2
        assert memo.stats.evictions == 1
        memo.get_or_compute((a,), compute)
        assert compute.calls == 3
        memo.get_or_compute((b,), compute)
        assert compute.calls == 4

    def test_zero_size_disables_caching(self):
        memo = IdentityMemo(max_size=0)
        compute = _Counter()
        a = []
        memo.get_or_compute((a,), compute)
        memo.get_or_compute((a,), compute)
        assert compute.calls == 2
        assert memo.size == 0

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError, match="max_size"):
            IdentityMemo(max_size=-1)

    def test_clear(self):
        memo = IdentityMemo()
        memo.get_or_compute(([],), _Counter())
        memo.clear()
        assert memo.size == 0
        assert memo.stats.total_entries == 0

    def test_shared_between_threads(self):
        memo = IdentityMemo(max_size=2)
        keys = [([], []) for _ in range(6)]
        errors = []
        start = threading.Barrier(8)

        def worker(offset):
            start.wait()
            try:
                for round_ in range(300):
                    memo.get_or_compute(keys[(offset + round_) % len(keys)], lambda: offset)
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert memo.size <= 2
        assert memo.stats.hits + memo.stats.misses == 8 * 300


class TestCacheStats:
    def test_hit_rate(self):
        stats = CacheStats(hits=3, misses=1)
        assert stats.hit_rate == 0.75
        assert stats.to_dict()["hit_rate"] == 0.75

    def test_empty_hit_rate(self):
        assert CacheStats().hit_rate == 0.0
