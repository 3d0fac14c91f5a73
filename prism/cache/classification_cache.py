"""
Classification Cache — Bounded memo of factor id → descriptor.

The reference, curated and heuristic tables are static while the process runs,
so entries never go stale. Keys come straight from request payloads, so the
cache holds at most ``max_entries`` ids and evicts the least recently used.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any

from prism.models.factor_models import FactorDescriptor

DEFAULT_MAX_ENTRIES = 4096


class ClassificationCache:
    """
    In-memory LRU cache keyed purely by the raw factor id string.

    Concurrent writers can at worst compute the same descriptor twice.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._store: OrderedDict[str, FactorDescriptor] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, factor_id: str) -> FactorDescriptor | None:
        """Look up a cached descriptor. Returns None on a miss."""
        descriptor = self._store.get(factor_id)
        if descriptor is None:
            self._misses += 1
            return None
        self._store.move_to_end(factor_id)
        self._hits += 1
        return descriptor

    def put(self, factor_id: str, descriptor: FactorDescriptor) -> None:
        self._store[factor_id] = descriptor
        self._store.move_to_end(factor_id)
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)
            self._evictions += 1

    def clear(self) -> None:
        """Clear all cached entries and counters."""
        self._store.clear()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def size(self) -> int:
        """Number of cached entries."""
        return len(self._store)

    def stats(self) -> dict[str, Any]:
        """Cache statistics."""
        return {
            "total_entries": len(self._store),
            "max_entries": self.max_entries,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
        }
