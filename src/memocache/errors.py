"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: memocache/errors.py.
"""

from __future__ import annotations


class MemoizeError(RuntimeError):
    """Base class for errors raised by the memoization layer itself."""


class MemoizeConfigError(MemoizeError, ValueError):
    """Raised when memoize options or the wrapped target are invalid."""


class KeyGeneratorError(MemoizeError, TypeError):
    """Raised when a key generator produces something other than a string."""
