"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed memoize configuration.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MemoizeConfigError
from .keys import default_key_generator
from .types import KeyGenerator

DEFAULT_TTL_S = 5 * 60.0
DEFAULT_ERROR_TTL_S = 30.0


class MemoizeOptions(BaseModel):
    """
    Cache controls for one memoized function.

    Attributes:
        ttl_s: Lifetime of successful results, in seconds.
        key_generator: Fingerprint function called with the call's arguments.
            `None` selects `default_key_generator`.
        cache_errors: Cache raised exceptions instead of only propagating them.
        error_ttl_s: Lifetime of cached exceptions; ignored unless
            `cache_errors` is set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ttl_s: float = Field(default=DEFAULT_TTL_S, ge=0)
    key_generator: KeyGenerator | None = None
    cache_errors: bool = False
    error_ttl_s: float = Field(default=DEFAULT_ERROR_TTL_S, ge=0)

    @property
    def resolved_key_generator(self) -> KeyGenerator:
        return self.key_generator or default_key_generator

    @classmethod
    def build(
        cls,
        options: "MemoizeOptions | None" = None,
        **overrides: Any,
    ) -> "MemoizeOptions":
        """Merge `overrides` onto `options` (or defaults) and validate the result."""
        base: dict[str, Any] = {}
        if options is not None:
            if not isinstance(options, MemoizeOptions):
                raise MemoizeConfigError(
                    f"options must be MemoizeOptions, got {type(options).__name__}"
                )
            base = {name: getattr(options, name) for name in cls.model_fields}
        try:
            return cls(**{**base, **overrides})
        except ValidationError as exc:
            raise MemoizeConfigError(f"Invalid memoize options: {exc}") from exc
