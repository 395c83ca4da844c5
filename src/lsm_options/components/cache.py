"""LRU cache implementation.

Charge-based LRU used for uncompressed and compressed block caches.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any


class LRUCache:
    """Least-recently-used cache bounded by total charge.

    Args:
        capacity: Maximum total charge held before evicting

    Invariants:
        - Usage never exceeds capacity after an insert returns, except when a
          single entry is larger than the capacity (it is then not kept)
        - Lookups refresh recency
        - Thread-safe via lock; one instance may be shared by many tables
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._lock = threading.Lock()
        # key -> (value, charge), oldest first
        self._entries: OrderedDict[bytes, tuple[Any, int]] = OrderedDict()
        self._usage = 0

    def insert(self, key: bytes, value: Any, charge: int) -> None:
        with self._lock:
            if key in self._entries:
                _old, old_charge = self._entries.pop(key)
                self._usage -= old_charge
            if charge > self.capacity:
                return
            self._entries[key] = (value, charge)
            self._usage += charge
            while self._usage > self.capacity:
                _evicted, (_value, evicted_charge) = self._entries.popitem(last=False)
                self._usage -= evicted_charge

    def lookup(self, key: bytes) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry[0]

    def erase(self, key: bytes) -> None:
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is not None:
                self._usage -= entry[1]

    def get_capacity(self) -> int:
        return self.capacity

    def get_usage(self) -> int:
        with self._lock:
            return self._usage

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LRUCache(capacity={self.capacity})"
