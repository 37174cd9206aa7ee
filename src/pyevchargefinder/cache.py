"""Time-expiring station cache with an LRU bound."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import ValidationError

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL = 5 * 60
DEFAULT_MAX_ENTRIES = 1024


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    timestamp: float
    value: Any


class StationCache(Generic[T]):
    """Memoize catalog results by query key.

    Entries expire ``ttl`` seconds after they were stored and are dropped
    when read after expiry. When more than ``max_entries`` keys are held the
    least recently used entry is evicted. Concurrent ``get_or_fetch`` calls
    for the same missing key share a single fetch.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValidationError("ttl must be greater than zero.")
        if max_entries < 1:
            raise ValidationError("max_entries must be at least 1.")
        self._ttl = float(ttl)
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._inflight: dict[str, asyncio.Future[T]] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return isinstance(key, str) and self._lookup(key) is not None

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._lookup(key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: T) -> None:
        with self._lock:
            self._store(key, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                _LOGGER.debug("Station cache hit for %s", key)
                return entry.value
            pending = self._inflight.get(key)
            if pending is None:
                _LOGGER.debug("Station cache miss for %s", key)
                pending = asyncio.ensure_future(self._fetch_and_store(key, fetch))
                self._inflight[key] = pending
            else:
                _LOGGER.debug("Joining in-flight fetch for %s", key)
        return await asyncio.shield(pending)

    async def _fetch_and_store(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        try:
            value = await fetch()
            with self._lock:
                self._store(key, value)
            return value
        except Exception:
            _LOGGER.warning("Station fetch for %s failed; result not cached", key)
            raise
        finally:
            with self._lock:
                self._inflight.pop(key, None)

    def _lookup(self, key: str) -> _CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self._ttl:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry

    def _store(self, key: str, value: T) -> None:
        self._entries[key] = _CacheEntry(timestamp=self._clock(), value=value)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            _LOGGER.debug("Evicted least recently used cache entry %s", evicted)
