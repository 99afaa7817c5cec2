"""Translation cache abstraction and in-memory implementation."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Protocol

DEFAULT_CACHE_TTL_SECONDS = 5 * 60
DEFAULT_CACHE_MAX_ENTRIES = 512
logger = logging.getLogger("apiv7_request")


def make_cache_key(*parts: object) -> str:
    """Stable key for a request shape built from plain mappings and sequences."""

    return json.dumps(parts, sort_keys=True, default=repr, separators=(",", ":"))


class TranslationCache(Protocol):
    """Cache contract consulted by translation strategies."""

    def get(self, key: Hashable) -> Any | None:
        """Return the cached value, or None when missing or expired."""

    def put(self, key: Hashable, value: Any) -> None:
        """Store a value under key, replacing any previous entry."""

    def invalidate(self, key: Hashable) -> None:
        """Drop the entry for key if present."""

    def clear(self) -> None:
        """Drop every entry."""


@dataclass(slots=True)
class _CachedValue:
    expires_at: float
    value: Any


class MemoryTranslationCache:
    """Process-local cache with TTL and a bounded number of entries."""

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock or time.monotonic
        self._lock = threading.RLock()
        self._items: OrderedDict[Hashable, _CachedValue] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, key: Hashable) -> Any | None:
        now = self._clock()
        with self._lock:
            stored = self._items.get(key)
            if stored is None:
                return None
            if stored.expires_at <= now:
                del self._items[key]
                return None
            self._items.move_to_end(key)
            return deepcopy(stored.value)

    def put(self, key: Hashable, value: Any) -> None:
        now = self._clock()
        stored = _CachedValue(expires_at=now + self._ttl_seconds, value=deepcopy(value))
        with self._lock:
            self._purge_expired_locked(now)
            self._items[key] = stored
            self._items.move_to_end(key)
            while len(self._items) > self._max_entries:
                evicted, _ = self._items.popitem(last=False)
                logger.debug("translation cache evicted key=%s", evicted)

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def _purge_expired_locked(self, now: float) -> None:
        expired = [key for key, item in self._items.items() if item.expires_at <= now]
        for key in expired:
            del self._items[key]


__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_CACHE_MAX_ENTRIES",
    "make_cache_key",
    "TranslationCache",
    "MemoryTranslationCache",
]
