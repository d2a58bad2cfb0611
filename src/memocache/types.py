"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared data types for cache entries, stats and memoized callables.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from types import TracebackType

    from .dispatcher import Memoizer
    from .store import EntryStore

KeyGenerator = Callable[..., str]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """
    One memoized result for a single fingerprint.

    Attributes:
        value: Settled result, stored exception (`is_error`), or the shared
            in-flight task (`pending`).
        expires_at: Monotonic timestamp after which the entry is stale.
        is_error: `value` is an exception to re-raise.
        pending: `value` is an asyncio task that has not settled yet.
        is_async: The wrapped call returned an awaitable, so callers of a
            plain wrapper expect something to await.
        traceback: Traceback captured when an error entry was stored; each
            re-raise starts from it instead of the previous re-raise.
    """

    value: Any
    expires_at: float
    is_error: bool = False
    pending: bool = False
    is_async: bool = False
    traceback: TracebackType | None = None

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Snapshot of one store: entry count and fingerprints in insertion order."""

    size: int
    keys: tuple[str, ...]


class MemoizedFunction(Protocol):
    """Callable returned by `memoize`, with its administrative surface."""

    cache: "EntryStore"
    memoizer: "Memoizer"

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...

    def clear(
        self,
        args: Sequence[Any] | None = None,
        kwargs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def stats(self) -> CacheStats: ...
