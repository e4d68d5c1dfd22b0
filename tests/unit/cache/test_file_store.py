"""Test file-backed cache store."""

import pytest

from searchcache.cache.file_store import FileCacheStore
from searchcache.exceptions import CacheError, CacheUnavailableError
from searchcache.search.callable_provider import CallableSearchProvider
from searchcache.services.search_service import SearchService


@pytest.fixture
def file_store(tmp_path, clock):
    """Create file store under a temporary directory."""
    return FileCacheStore(tmp_path / "cache", namespace="search", clock=clock)


class TestFileCacheStore:
    """Test file-backed cache store."""

    @pytest.mark.asyncio
    async def test_should_persist_entry_to_disk(self, file_store):
        """Test entry file layout."""
        await file_store.put("search:abc123", "q", {"results": [1, 2]}, 60)

        path = file_store.path_for("search:abc123")
        assert path.name == "abc123.json"
        assert path.parent == file_store.directory
        assert path.exists()

    @pytest.mark.asyncio
    async def test_should_read_entry_from_new_instance(self, file_store, tmp_path, clock):
        """Test entries survive a restart."""
        await file_store.put("search:abc", "q", {"results": [1]}, 60)

        reopened = FileCacheStore(tmp_path / "cache", namespace="search", clock=clock)
        entry = await reopened.get("search:abc")

        assert entry is not None
        assert entry.value == {"results": [1]}

    @pytest.mark.asyncio
    async def test_should_return_none_for_missing_file(self, file_store):
        """Test missing entry."""
        assert await file_store.get("search:nothing") is None

    @pytest.mark.asyncio
    async def test_should_discard_stale_file(self, file_store, clock):
        """Test stale files are removed on read."""
        await file_store.put("search:abc", "q", "v", 30)
        clock.advance(31)

        assert await file_store.get("search:abc") is None
        assert not file_store.path_for("search:abc").exists()

    @pytest.mark.asyncio
    async def test_should_discard_corrupt_file(self, file_store):
        """Test corrupt files are treated as misses."""
        path = file_store.path_for("search:abc")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        assert await file_store.get("search:abc") is None
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_should_leave_no_temporary_files(self, file_store):
        """Test atomic write cleanup."""
        await file_store.put("search:abc", "q", "v", 60)
        await file_store.put("search:abc", "q", "v2", 60)

        names = [p.name for p in file_store.directory.iterdir()]
        assert names == ["abc.json"]

    @pytest.mark.asyncio
    async def test_should_clear_and_count(self, file_store):
        """Test clear and size."""
        await file_store.put("search:a", "a", "v", 60)
        await file_store.put("search:b", "b", "v", 60)
        assert await file_store.size() == 2

        assert await file_store.clear() == 2
        assert await file_store.size() == 0

    @pytest.mark.asyncio
    async def test_should_clear_empty_directory(self, file_store):
        """Test clear before anything was written."""
        assert await file_store.clear() == 0

    @pytest.mark.asyncio
    async def test_should_delete_entry(self, file_store):
        """Test delete."""
        await file_store.put("search:a", "a", "v", 60)

        assert await file_store.delete("search:a") is True
        assert await file_store.delete("search:a") is False

    @pytest.mark.asyncio
    async def test_should_purge_expired_files(self, file_store, clock):
        """Test purge removes only stale files."""
        await file_store.put("search:short", "short", "v", 5)
        await file_store.put("search:long", "long", "v", 500)
        clock.advance(10)

        assert await file_store.purge_expired() == 1
        assert await file_store.size() == 1

    @pytest.mark.asyncio
    async def test_should_reject_unserializable_value(self, file_store):
        """Test non-JSON values raise cache error."""
        with pytest.raises(CacheError):
            await file_store.put("search:a", "a", object(), 60)

    @pytest.mark.asyncio
    async def test_should_raise_unavailable_when_directory_is_a_file(
        self, tmp_path, clock
    ):
        """Test unwritable cache location."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        store = FileCacheStore(blocker, namespace="search", clock=clock)

        with pytest.raises(CacheUnavailableError):
            await store.put("search:a", "a", "v", 60)
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_should_ping_writable_directory(self, file_store):
        """Test ping creates directory."""
        assert await file_store.ping() is True
        assert file_store.directory.is_dir()

    @pytest.mark.asyncio
    async def test_should_discard_undecodable_file(self, file_store):
        """Test invalid UTF-8 is treated as a corrupt entry."""
        path = file_store.path_for("search:abc")
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe garbage")

        assert await file_store.get("search:abc") is None
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_should_purge_undecodable_file(self, file_store):
        """Test purge removes files that cannot be decoded."""
        await file_store.put("search:good", "good", "v", 60)
        bad = file_store.path_for("search:bad")
        bad.write_bytes(b"\xff\xfe garbage")

        assert await file_store.purge_expired() == 1
        assert await file_store.get("search:good") is not None


class TestFileStoreLookupRecovery:
    """Test the cache gate over a damaged file store."""

    @pytest.mark.asyncio
    async def test_should_search_when_entry_file_is_undecodable(
        self, file_store, recorder
    ):
        """Test a damaged entry becomes a miss and is replaced."""
        service = SearchService(
            file_store, recorder, CallableSearchProvider(lambda q: "fresh")
        )
        path = file_store.path_for(service.cache_key("foo"))
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe garbage")

        response = await service.lookup("foo")

        assert response.result == "fresh"
        assert response.cache_info.stored is True
        assert (await file_store.get(service.cache_key("foo"))).value == "fresh"
