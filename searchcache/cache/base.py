"""
Cache store base class and interface.

Sandi Metz Principles:
- Single Responsibility: Store abstraction
- Interface Segregation: Minimal store interface
- Dependency Inversion: Depend on abstraction, not concrete classes
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from searchcache.models.cache_entry import CacheEntry

Clock = Callable[[], float]


class BaseCacheStore(ABC):
    """
    Abstract base class for cache stores.

    Implementations return only entries that are still within their TTL.
    Storage failures are raised as CacheUnavailableError.
    """

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize store.

        Args:
            clock: Time source in epoch seconds (defaults to time.time)
        """
        self._clock = clock or time.time

    def now(self) -> float:
        """Get current time from the store clock."""
        return self._clock()

    def _build_entry(
        self, key: str, query: str, value: Any, ttl_seconds: float
    ) -> CacheEntry:
        """Build entry stamped with the current time."""
        return CacheEntry(
            key=key,
            query=query,
            value=value,
            created_at=self.now(),
            ttl_seconds=ttl_seconds,
        )

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry]:
        """
        Get valid entry for key.

        Args:
            key: Cache key

        Returns:
            Cache entry if present and not stale, None otherwise

        Raises:
            CacheUnavailableError: If storage cannot be read
        """
        pass

    @abstractmethod
    async def put(
        self, key: str, query: str, value: Any, ttl_seconds: float
    ) -> CacheEntry:
        """
        Insert or overwrite entry.

        Args:
            key: Cache key
            query: Original query text
            value: Result payload
            ttl_seconds: Time-to-live in seconds

        Returns:
            Stored entry

        Raises:
            CacheUnavailableError: If storage cannot be written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete entry, returning True if one was removed."""
        pass

    @abstractmethod
    async def clear(self) -> int:
        """Remove all entries, returning the number removed."""
        pass

    @abstractmethod
    async def size(self) -> int:
        """Get number of stored entries (stale ones included)."""
        pass

    @abstractmethod
    async def purge_expired(self) -> int:
        """Remove stale entries, returning the number removed."""
        pass

    async def ping(self) -> bool:
        """Check the store is reachable."""
        return True

    async def close(self) -> None:
        """Release store resources."""
        return None

    def get_name(self) -> str:
        """Get backend name."""
        return type(self).__name__
