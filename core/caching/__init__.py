"""
Back Office Core Caching - Identity-Keyed Memo
================================================
Memoizes a pure computation by the *identity* of its input collections.

The ledger recomputes from scratch on every query. Merging and
normalizing the source collections is the most expensive stage and the
least likely to change between two queries (filters and pages change,
the loaded collections usually do not), so that stage may be memoized
on "same list objects as last time".

Doctrine: the memo is disposable. Dropping it changes nothing but speed.

Identity is checked with `is`, and every cached entry keeps strong
references to its key objects, so an id() cannot be recycled by a new
collection while the entry is alive. Callers must not mutate a
collection in place and expect a fresh result; replace the collection.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Sequence, Tuple, TypeVar


logger = logging.getLogger("backoffice.caching")

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════
# CACHE STATISTICS
# ══════════════════════════════════════════════════════════════

@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    total_entries: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "total_entries": self.total_entries,
            "hit_rate": round(self.hit_rate, 4),
        }


# ══════════════════════════════════════════════════════════════
# IDENTITY MEMO (LRU)
# ══════════════════════════════════════════════════════════════

@dataclass
class _MemoEntry(Generic[T]):
    sources: Tuple[Any, ...]
    value: T


class IdentityMemo(Generic[T]):
    """
    LRU memo keyed by the identities of a tuple of input objects.

    max_size == 0 disables caching (every call computes). Safe to share
    between request threads: the store is guarded by a lock, while
    compute() runs outside it, so two threads missing on the same key
    may both compute and the later result is kept.
    """

    def __init__(self, max_size: int = 8) -> None:
        if max_size < 0:
            raise ValueError("max_size must be >= 0.")
        self._max_size = max_size
        self._entries: OrderedDict[Tuple[int, ...], _MemoEntry[T]] = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.Lock()

    def get_or_compute(
        self,
        sources: Sequence[Any],
        compute: Callable[[], T],
    ) -> T:
        sources = tuple(sources)
        key = tuple(id(s) for s in sources)

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and all(a is b for a, b in zip(entry.sources, sources)):
                self._entries.move_to_end(key)
                self._stats.hits += 1
                return entry.value
            self._stats.misses += 1

        value = compute()
        if self._max_size == 0:
            return value

        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                self._evict_lru()
            self._entries[key] = _MemoEntry(sources=sources, value=value)
            self._entries.move_to_end(key)
            self._stats.total_entries = len(self._entries)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._stats.total_entries = 0

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def size(self) -> int:
        return len(self._entries)

    def _evict_lru(self) -> None:
        # Caller holds self._lock.
        if self._entries:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            self._stats.evictions += 1
            self._stats.total_entries = len(self._entries)
            logger.debug(f"Evicted memo entry; {len(self._entries)} remain")
