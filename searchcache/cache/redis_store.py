"""
Redis cache store.

Sandi Metz Principles:
- Single Responsibility: Redis data access
- Small methods: Each operation isolated
- Dependency Injection: Redis client injected
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError
from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from searchcache.cache.base import BaseCacheStore, Clock
from searchcache.exceptions import CacheError, CacheUnavailableError
from searchcache.models.cache_entry import CacheEntry
from searchcache.utils.hasher import DEFAULT_NAMESPACE
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

# Redis and socket failures both mean the store is unreachable
STORE_ERRORS = (RedisError, OSError)


def create_redis_pool(redis_url: str, max_connections: int = 10) -> ConnectionPool:
    """
    Create Redis connection pool.

    Args:
        redis_url: Redis connection URL
        max_connections: Pool size

    Returns:
        Redis connection pool
    """
    return ConnectionPool.from_url(
        redis_url,
        max_connections=max_connections,
        decode_responses=True,
    )


class RedisCacheStore(BaseCacheStore):
    """
    Cache store backed by Redis.

    Entries are written with a millisecond expiry so Redis drops them on
    its own; validity is still checked against the local clock on read.
    """

    def __init__(
        self,
        client: Redis,
        namespace: str = DEFAULT_NAMESPACE,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize store.

        Args:
            client: Redis client
            namespace: Key prefix this store owns
            clock: Time source in epoch seconds
        """
        super().__init__(clock)
        self._client = client
        self._namespace = namespace

    @classmethod
    def from_pool(
        cls,
        pool: ConnectionPool,
        namespace: str = DEFAULT_NAMESPACE,
        clock: Optional[Clock] = None,
    ) -> "RedisCacheStore":
        """Create store using a connection pool."""
        return cls(Redis(connection_pool=pool), namespace=namespace, clock=clock)

    async def get(self, key: str) -> Optional[CacheEntry]:
        try:
            data = await self._client.get(key)
        except STORE_ERRORS as e:
            raise CacheUnavailableError(f"Redis fetch failed for {key}: {e}") from e

        if not data:
            return None

        try:
            entry = CacheEntry.model_validate_json(data)
        except PydanticValidationError as e:
            logger.warning("Corrupt cache entry", key=key, error=str(e))
            await self._prune(key)
            return None

        if entry.is_stale(self.now()):
            await self._prune(key)
            return None
        return entry

    async def put(
        self, key: str, query: str, value: Any, ttl_seconds: float
    ) -> CacheEntry:
        entry = self._build_entry(key, query, value, ttl_seconds)
        try:
            data = entry.model_dump_json()
        except PydanticSerializationError as e:
            raise CacheError(f"Result for {key} is not serializable: {e}") from e

        try:
            await self._client.set(key, data, px=max(1, int(ttl_seconds * 1000)))
        except STORE_ERRORS as e:
            raise CacheUnavailableError(f"Redis store failed for {key}: {e}") from e

        return entry

    async def delete(self, key: str) -> bool:
        try:
            return await self._client.delete(key) > 0
        except STORE_ERRORS as e:
            raise CacheUnavailableError(f"Redis delete failed for {key}: {e}") from e

    async def clear(self) -> int:
        try:
            keys = await self._namespace_keys()
            count = await self._client.delete(*keys) if keys else 0
        except STORE_ERRORS as e:
            raise CacheUnavailableError(f"Redis clear failed: {e}") from e

        logger.info("Redis cache cleared", namespace=self._namespace, count=count)
        return count

    async def size(self) -> int:
        try:
            return len(await self._namespace_keys())
        except STORE_ERRORS as e:
            raise CacheUnavailableError(f"Redis scan failed: {e}") from e

    async def purge_expired(self) -> int:
        # Redis expires keys itself.
        return 0

    async def ping(self) -> bool:
        try:
            await self._client.ping()
            return True
        except STORE_ERRORS as e:
            logger.error("Redis ping failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._client.aclose()
        await self._client.connection_pool.disconnect()

    async def _namespace_keys(self) -> list[str]:
        keys = []
        async for key in self._client.scan_iter(match=f"{self._namespace}:*"):
            keys.append(key)
        return keys

    async def _prune(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except STORE_ERRORS as e:
            logger.warning("Could not prune entry", key=key, error=str(e))
