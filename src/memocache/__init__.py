"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: memocache/__init__.py.
"""

from .dispatcher import Memoizer, memoize
from .errors import KeyGeneratorError, MemoizeConfigError, MemoizeError
from .keys import FALLBACK_DELIMITER, default_key_generator
from .options import DEFAULT_ERROR_TTL_S, DEFAULT_TTL_S, MemoizeOptions
from .store import EntryStore
from .types import CacheEntry, CacheStats, KeyGenerator, MemoizedFunction

__all__ = [
    "memoize",
    "Memoizer",
    "MemoizeOptions",
    "MemoizedFunction",
    "CacheEntry",
    "CacheStats",
    "EntryStore",
    "KeyGenerator",
    "default_key_generator",
    "FALLBACK_DELIMITER",
    "DEFAULT_TTL_S",
    "DEFAULT_ERROR_TTL_S",
    "MemoizeError",
    "MemoizeConfigError",
    "KeyGeneratorError",
]
