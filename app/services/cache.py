from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from typing import Any

from app.config import settings

_MISSING = object()


class TTLCache:
    """In-process TTL cache. Shared between request threads, so every access
    goes through one lock."""

    def __init__(self, ttl_seconds: int | None = None, max_entries: int | None = None):
        self._store: dict[Hashable, tuple[Any, float]] = {}
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self._max_entries = (
            max_entries if max_entries is not None else settings.cache_max_entries
        )
        self._lock = threading.Lock()

    def _lookup(self, key: Hashable) -> Any:
        entry = self._store.get(key)
        if entry is None:
            return _MISSING
        value, expires_at = entry
        if time.time() < expires_at:
            return value
        del self._store[key]
        return _MISSING

    def get(self, key: Hashable) -> Any | None:
        with self._lock:
            value = self._lookup(key)
        return None if value is _MISSING else value

    def _purge_expired(self) -> None:
        now = time.time()
        for key in [k for k, (_, expires_at) in self._store.items() if expires_at <= now]:
            del self._store[key]

    def set(self, key: Hashable, value: Any, ttl: int | None = None) -> None:
        expires_at = time.time() + (ttl if ttl is not None else self._ttl)
        with self._lock:
            self._purge_expired()
            if self._store and key not in self._store and len(self._store) >= self._max_entries:
                # Evict whatever expires soonest
                oldest = min(self._store, key=lambda k: self._store[k][1])
                del self._store[oldest]
            self._store[key] = (value, expires_at)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        with self._lock:
            value = self._lookup(key)
        if value is not _MISSING:
            return value
        # Computed outside the lock; two racing callers both compute the same pure result
        value = compute()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    @property
    def size(self) -> int:
        return len(self._store)


result_cache = TTLCache()
