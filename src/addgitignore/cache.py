"""
In-memory TTL cache.

Entries expire lazily: nothing runs in the background, an expired entry is
dropped the next time its key is looked up (or on prune()). Safe for
interleaved asyncio use since get() and put() never await.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheItem(Generic[T]):
    """A cached value and the time it was stored."""

    key: str
    value: T
    created_at: float


class TTLCache(Generic[T]):
    """
    Key-value cache where entries expire after a fixed TTL.

    An entry is expired once ``now - created_at >= ttl_seconds``, so a TTL of
    zero never returns anything.

    Example:
        >>> cache = TTLCache(ttl_seconds=3600)
        >>> cache.put("gitignore/", entries)
        >>> cache.get("gitignore/") is entries
        True
    """

    def __init__(
        self,
        ttl_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._store: dict[str, CacheItem[T]] = {}

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def get(self, key: str) -> T | None:
        """Return the cached value, or None if missing or expired."""
        item = self._store.get(key)
        if item is None:
            return None
        if self.is_expired(item):
            del self._store[key]
            return None
        return item.value

    def put(self, key: str, value: T) -> None:
        """Insert or replace the entry for key, stamped with the current time."""
        self._store[key] = CacheItem(key=key, value=value, created_at=self._clock())

    def is_expired(self, item: CacheItem[T]) -> bool:
        return self._clock() - item.created_at >= self._ttl

    def prune(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        expired = [key for key, item in self._store.items() if self.is_expired(item)]
        for key in expired:
            del self._store[key]
        return len(expired)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._store)
