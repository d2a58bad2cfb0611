"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Default argument fingerprinting.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("memocache.keys")

FALLBACK_DELIMITER = "|"


def default_key_generator(*args: Any, **kwargs: Any) -> str:
    """
    Build a fingerprint from call arguments.

    Positional-only calls serialize as a JSON list (`(1, "x")` -> `[1,"x"]`).
    Dict keys are sorted at every level, so `{"a": 1, "b": 2}` and
    `{"b": 2, "a": 1}` share a fingerprint with or without keyword arguments.
    Calls with keyword arguments serialize as
    `{"args": [...], "kwargs": {...}}` with sorted keys, so keyword order
    does not matter and the two shapes never collide.

    Arguments JSON cannot encode (arbitrary objects, circular references)
    fall back to joining `str()` of each argument with `FALLBACK_DELIMITER`.
    The fallback keeps the cache usable but does not guarantee distinct
    fingerprints: two objects with the same `str()` share an entry, and so
    do values whose text contains the delimiter.
    """
    try:
        if kwargs:
            return json.dumps(
                {"args": list(args), "kwargs": kwargs},
                sort_keys=True,
                separators=(",", ":"),
            )
        return json.dumps(list(args), sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        logger.debug("Falling back to string fingerprint: %s", exc)

    parts = [str(arg) for arg in args]
    parts.extend(f"{name}={value}" for name, value in sorted(kwargs.items()))
    return FALLBACK_DELIMITER.join(parts)
