"""
In-memory cache store.

Sandi Metz Principles:
- Single Responsibility: Process-local entry storage
- Small methods: Each operation isolated
- Dependency Injection: Clock injected
"""

import asyncio
from collections import OrderedDict
from typing import Any, Optional

from searchcache.cache.base import BaseCacheStore, Clock
from searchcache.models.cache_entry import CacheEntry
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryCacheStore(BaseCacheStore):
    """
    Dictionary-backed cache store.

    Entries are copied on the way in and out, so callers never share the
    stored value. Entries are kept in least-recently-used order. With
    max_entries set, a full store first drops stale entries, then the least
    recently used one.
    """

    def __init__(self, max_entries: int = 0, clock: Optional[Clock] = None):
        """
        Initialize store.

        Args:
            max_entries: Entry bound (0 = unbounded)
            clock: Time source in epoch seconds
        """
        super().__init__(clock)
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[CacheEntry]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_stale(self.now()):
                del self._entries[key]
                logger.debug("Pruned stale entry", key=key)
                return None

            self._entries.move_to_end(key)
            return entry.model_copy(deep=True)

    async def put(
        self, key: str, query: str, value: Any, ttl_seconds: float
    ) -> CacheEntry:
        entry = self._build_entry(key, query, value, ttl_seconds)

        async with self._lock:
            self._entries.pop(key, None)
            if self._max_entries and len(self._entries) >= self._max_entries:
                self._evict()
            self._entries[key] = entry.model_copy(deep=True)

        return entry

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> int:
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Memory cache cleared", count=count)
        return count

    async def size(self) -> int:
        return len(self._entries)

    async def purge_expired(self) -> int:
        async with self._lock:
            return self._purge_expired_locked()

    def _purge_expired_locked(self) -> int:
        """Drop stale entries; caller holds the lock."""
        now = self.now()
        stale = [key for key, entry in self._entries.items() if entry.is_stale(now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def _evict(self) -> None:
        """Make room for one entry; caller holds the lock."""
        self._purge_expired_locked()
        while len(self._entries) >= self._max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.debug("Evicted least recently used entry", key=evicted_key)
