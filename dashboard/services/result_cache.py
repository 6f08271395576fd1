"""
In-memory response cache with a fixed time-to-live.

Entries expire a fixed number of seconds after they were written; reads do
not extend their lifetime. There is no capacity bound, so expired entries are
purged lazily on access.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

DEFAULT_TTL_SECONDS = 300.0

_MISSING = object()


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class ResultCache:
    """Thread-safe key/value cache for shaped API responses."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or ``default`` when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return default
            return entry.value

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = CacheEntry(value=value, expires_at=now + self._ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]


def cache_key(resource: str, *parts: object) -> str:
    """Deterministic key such as ``emails:2:10`` or ``attachments:<id>``."""
    return ":".join([resource, *(str(part) for part in parts)])


__all__ = ["CacheEntry", "DEFAULT_TTL_SECONDS", "ResultCache", "cache_key"]
