"""
File-backed cache store.

Sandi Metz Principles:
- Single Responsibility: Entry persistence on local disk
- Small methods: Blocking I/O isolated in helpers run off the event loop
- Dependency Injection: Directory and clock injected
"""

import asyncio
import os
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from searchcache.cache.base import BaseCacheStore, Clock
from searchcache.exceptions import CacheError, CacheUnavailableError
from searchcache.models.cache_entry import CacheEntry
from searchcache.utils.hasher import DEFAULT_NAMESPACE, key_digest
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)


class FileCacheStore(BaseCacheStore):
    """
    Cache store keeping one JSON document per entry.

    Layout: <cache_dir>/<namespace>/<sha256>.json. Writes go through a
    temporary file and os.replace so readers never see partial entries.
    """

    def __init__(
        self,
        cache_dir: Union[str, Path],
        namespace: str = DEFAULT_NAMESPACE,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize store.

        Args:
            cache_dir: Root cache directory
            namespace: Subdirectory for this cache
            clock: Time source in epoch seconds
        """
        super().__init__(clock)
        self._directory = Path(cache_dir) / namespace
        self._lock = asyncio.Lock()

    @property
    def directory(self) -> Path:
        """Get directory holding entry files."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """Get file path for a cache key."""
        return self._directory / f"{key_digest(key)}.json"

    async def get(self, key: str) -> Optional[CacheEntry]:
        path = self.path_for(key)
        try:
            raw = await asyncio.to_thread(_read_bytes, path)
        except OSError as e:
            raise CacheUnavailableError(f"Cannot read cache entry {key}: {e}") from e

        if raw is None:
            return None

        entry = self._parse(path, raw)
        if entry is None or entry.key != key or entry.is_stale(self.now()):
            await self._discard(path)
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

        path = self.path_for(key)
        async with self._lock:
            try:
                await asyncio.to_thread(_write_atomic, path, data)
            except OSError as e:
                raise CacheUnavailableError(
                    f"Cannot write cache entry {key}: {e}"
                ) from e

        return entry

    async def delete(self, key: str) -> bool:
        async with self._lock:
            try:
                return await asyncio.to_thread(_unlink, self.path_for(key))
            except OSError as e:
                raise CacheUnavailableError(f"Cannot delete {key}: {e}") from e

    async def clear(self) -> int:
        async with self._lock:
            try:
                count = await asyncio.to_thread(self._clear_sync)
            except OSError as e:
                raise CacheUnavailableError(f"Cannot clear cache: {e}") from e
        logger.info("File cache cleared", directory=str(self._directory), count=count)
        return count

    async def size(self) -> int:
        try:
            return await asyncio.to_thread(
                lambda: sum(1 for _ in self._entry_files())
            )
        except OSError as e:
            raise CacheUnavailableError(f"Cannot list cache: {e}") from e

    async def purge_expired(self) -> int:
        async with self._lock:
            try:
                return await asyncio.to_thread(self._purge_sync)
            except OSError as e:
                raise CacheUnavailableError(f"Cannot purge cache: {e}") from e

    async def ping(self) -> bool:
        try:
            await asyncio.to_thread(self._directory.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cache directory unavailable", error=str(e))
            return False
        return os.access(self._directory, os.W_OK)

    def _parse(self, path: Path, raw: bytes) -> Optional[CacheEntry]:
        """Parse stored entry, returning None when corrupt."""
        try:
            return CacheEntry.model_validate_json(raw.decode("utf-8"))
        except (UnicodeDecodeError, PydanticValidationError) as e:
            logger.warning("Corrupt cache entry", path=str(path), error=str(e))
            return None

    async def _discard(self, path: Path) -> None:
        """Prune a stale or corrupt entry file."""
        async with self._lock:
            try:
                await asyncio.to_thread(_unlink, path)
            except OSError as e:
                logger.warning("Could not prune entry", path=str(path), error=str(e))

    def _entry_files(self) -> Iterator[Path]:
        if not self._directory.is_dir():
            return iter(())
        return self._directory.glob("*.json")

    def _clear_sync(self) -> int:
        return sum(1 for path in list(self._entry_files()) if _unlink(path))

    def _purge_sync(self) -> int:
        now = self.now()
        removed = 0
        for path in list(self._entry_files()):
            raw = _read_bytes(path)
            if raw is None:
                continue
            entry = self._parse(path, raw)
            if entry is None or entry.is_stale(now):
                removed += int(_unlink(path))
        return removed


def _read_bytes(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def _write_atomic(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        tmp_path.write_text(data, encoding="utf-8")
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
