"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: memocache/store.py.
"""

from __future__ import annotations

from collections.abc import Iterator
from threading import Lock
from typing import Any

from .types import CacheEntry


class EntryStore:
    """
    Process-local fingerprint -> `CacheEntry` mapping owned by one memoizer.

    Insertion order is kept for enumeration only. Expiry is not enforced
    here; the memoizer purges stale rows when it looks them up.
    """

    def __init__(self) -> None:
        self._rows: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._rows.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._rows[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._rows.pop(key, None)

    def discard_if(self, key: str, entry: CacheEntry) -> bool:
        """Delete `key` only while it still maps to this exact `entry`."""
        with self._lock:
            if self._rows.get(key) is not entry:
                return False
            del self._rows[key]
            return True

    def replace_if(self, key: str, expected_value: Any, entry: CacheEntry) -> bool:
        """Overwrite `key` only while its current entry holds `expected_value`."""
        with self._lock:
            current = self._rows.get(key)
            if current is None or current.value is not expected_value:
                return False
            self._rows[key] = entry
            return True

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._rows)

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._rows)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._rows

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
