"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Memoization dispatcher: serve from cache, compute, or join an in-flight call.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, cast

from .errors import KeyGeneratorError, MemoizeConfigError, MemoizeError
from .options import MemoizeOptions
from .store import EntryStore
from .types import CacheEntry, CacheStats, MemoizedFunction

logger = logging.getLogger("memocache.dispatcher")


def _now() -> float:
    return time.monotonic()


async def _settled(value: Any) -> Any:
    return value


class Memoizer:
    """
    Per-function cache dispatcher.

    Each instance owns one `EntryStore`. A call either serves a live entry,
    joins the pending task of an in-flight awaitable call, or invokes the
    wrapped function and installs a new entry. Awaitable results are wrapped
    in a task stored immediately, so every caller arriving before settlement
    shares one invocation of the wrapped function.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        options: MemoizeOptions | None = None,
    ) -> None:
        if not callable(fn):
            raise MemoizeConfigError(
                f"memoize target must be callable, got {type(fn).__name__}"
            )
        self._fn = fn
        self._options = options or MemoizeOptions()
        self._key_generator = self._options.resolved_key_generator
        self._store = EntryStore()

    @property
    def options(self) -> MemoizeOptions:
        return self._options

    @property
    def store(self) -> EntryStore:
        return self._store

    def call(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Any:
        """Plain-call entry point; awaitable results stay awaitable."""
        entry = self.resolve(args, kwargs)
        if entry.is_async and not entry.pending:
            return _settled(entry.value)
        return entry.value

    async def acall(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Any:
        """Coroutine entry point used for `async def` targets."""
        entry = self.resolve(args, kwargs)
        if entry.pending:
            # A cancelled caller must not cancel the shared task.
            return await asyncio.shield(entry.value)
        return entry.value

    def fingerprint(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
        """Run the active key generator over one call's arguments."""
        key = self._key_generator(*args, **kwargs)
        if not isinstance(key, str):
            raise KeyGeneratorError(
                f"Key generator must return str, got {type(key).__name__}"
            )
        return key

    def lookup(self, key: str) -> CacheEntry | None:
        """Return the live entry for `key`, purging it first if it has expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(_now()):
            self._store.discard_if(key, entry)
            logger.debug("Purged expired entry %s", key[:64])
            return None
        return entry

    def resolve(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> CacheEntry:
        """
        Return the entry that answers this call.

        Raises the stored exception for live error entries, and whatever the
        wrapped function raises synchronously on a miss.
        """
        key = self.fingerprint(args, kwargs)
        entry = self.lookup(key)
        if entry is not None:
            if entry.is_error:
                logger.debug("Re-raising cached error for %s", key[:64])
                raise entry.value.with_traceback(entry.traceback)
            if entry.pending:
                logger.debug("Joining in-flight call for %s", key[:64])
            else:
                logger.debug("Cache hit for %s", key[:64])
            return entry

        logger.debug("Cache miss for %s", key[:64])
        try:
            result = self._fn(*args, **kwargs)
        except Exception as exc:
            if self._options.cache_errors:
                self._store.set(key, self._error_entry(exc))
                logger.debug("Cached %s for %s", type(exc).__name__, key[:64])
            raise

        if inspect.isawaitable(result):
            return self._install_pending(key, result)

        entry = CacheEntry(value=result, expires_at=_now() + self._options.ttl_s)
        self._store.set(key, entry)
        return entry

    def clear(
        self,
        args: Sequence[Any] | None = None,
        kwargs: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Drop cached entries.

        With no arguments the whole store is emptied. Otherwise `args` and
        `kwargs` are the original call's arguments; their fingerprint is
        recomputed and only that entry is removed. `clear(())` targets the
        zero-argument call.
        """
        if args is None and kwargs is None:
            self._store.clear()
            logger.debug("Cleared all entries")
            return
        if isinstance(args, (str, bytes)):
            raise TypeError(
                "clear() expects the call's argument sequence, not a fingerprint"
            )
        key = self.fingerprint(tuple(args or ()), dict(kwargs or {}))
        self._store.delete(key)
        logger.debug("Cleared entry %s", key[:64])

    def stats(self) -> CacheStats:
        keys = self._store.keys()
        return CacheStats(size=len(keys), keys=keys)

    def _error_entry(self, exc: BaseException) -> CacheEntry:
        return CacheEntry(
            value=exc,
            expires_at=_now() + self._options.error_ttl_s,
            is_error=True,
            traceback=exc.__traceback__,
        )

    def _install_pending(self, key: str, awaitable: Awaitable[Any]) -> CacheEntry:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise MemoizeError(
                "Awaitable results can only be memoized inside a running event loop"
            ) from exc

        task = loop.create_task(self._settle(key, awaitable))
        task.add_done_callback(functools.partial(self._on_task_done, key, awaitable))
        entry = CacheEntry(
            value=task,
            expires_at=_now() + self._options.ttl_s,
            pending=True,
            is_async=True,
        )
        self._store.set(key, entry)
        return entry

    async def _settle(self, key: str, awaitable: Awaitable[Any]) -> Any:
        task = asyncio.current_task()
        try:
            value = await awaitable
        except Exception as exc:
            if not self._options.cache_errors:
                self._drop_pending(key, task)
            elif self._store.replace_if(key, task, self._error_entry(exc)):
                logger.debug("Cached %s for %s", type(exc).__name__, key[:64])
            raise
        except BaseException:
            self._drop_pending(key, task)
            raise

        # Only this task's own entry is replaced; a clear or newer call wins.
        settled = CacheEntry(
            value=value,
            expires_at=_now() + self._options.ttl_s,
            is_async=True,
        )
        if self._store.replace_if(key, task, settled):
            logger.debug("Settled in-flight call for %s", key[:64])
        return value

    def _drop_pending(self, key: str, task: asyncio.Task[Any] | None) -> None:
        entry = self._store.get(key)
        if entry is not None and entry.value is task:
            self._store.discard_if(key, entry)

    def _on_task_done(
        self,
        key: str,
        awaitable: Awaitable[Any],
        task: asyncio.Task[Any],
    ) -> None:
        # A task cancelled before its first step never runs `_settle`.
        if (
            inspect.iscoroutine(awaitable)
            and inspect.getcoroutinestate(awaitable) == inspect.CORO_CREATED
        ):
            awaitable.close()
        self._drop_pending(key, task)


def _wrap(fn: Callable[..., Any], options: MemoizeOptions) -> MemoizedFunction:
    memoizer = Memoizer(fn, options)

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await memoizer.acall(args, kwargs)

    else:

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return memoizer.call(args, kwargs)

    wrapper.clear = memoizer.clear  # type: ignore[attr-defined]
    wrapper.stats = memoizer.stats  # type: ignore[attr-defined]
    wrapper.cache = memoizer.store  # type: ignore[attr-defined]
    wrapper.memoizer = memoizer  # type: ignore[attr-defined]
    return cast(MemoizedFunction, wrapper)


def memoize(
    fn: Callable[..., Any] | None = None,
    options: MemoizeOptions | None = None,
    **overrides: Any,
) -> Any:
    """
    Wrap `fn` with a TTL result cache.

    Usable as `memoize(fn)`, `memoize(fn, MemoizeOptions(...))`, `@memoize`
    or `@memoize(ttl_s=10, cache_errors=True)`. Keyword overrides are
    `MemoizeOptions` field names applied on top of `options`.

    Coroutine functions get an `async def` wrapper. Functions returning any
    other awaitable get a plain wrapper that hands back the shared pending
    task while the call is in flight, and a fresh awaitable of the settled
    value afterwards.
    """
    resolved = MemoizeOptions.build(options, **overrides)

    def decorate(target: Callable[..., Any]) -> MemoizedFunction:
        return _wrap(target, resolved)

    if fn is None:
        return decorate
    return decorate(fn)
