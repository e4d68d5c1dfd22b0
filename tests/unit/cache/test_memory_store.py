"""Test in-memory cache store."""

import pytest

from searchcache.cache.memory_store import InMemoryCacheStore


class TestInMemoryCacheStore:
    """Test in-memory cache store."""

    @pytest.mark.asyncio
    async def test_should_return_stored_entry(self, memory_store):
        """Test put then get."""
        stored = await memory_store.put("search:a", "a", {"hits": 1}, 60)

        entry = await memory_store.get("search:a")

        assert entry == stored
        assert entry.value == {"hits": 1}

    @pytest.mark.asyncio
    async def test_should_return_none_for_unknown_key(self, memory_store):
        """Test missing key."""
        assert await memory_store.get("search:missing") is None

    @pytest.mark.asyncio
    async def test_should_prune_stale_entry_on_read(self, memory_store, clock):
        """Test expired entries are removed when read."""
        await memory_store.put("search:a", "a", "v", 10)
        clock.advance(10)

        assert await memory_store.get("search:a") is None
        assert await memory_store.size() == 0

    @pytest.mark.asyncio
    async def test_should_overwrite_and_restart_ttl(self, memory_store, clock):
        """Test put replaces entry and its timestamp."""
        await memory_store.put("search:a", "a", "old", 10)
        clock.advance(8)
        await memory_store.put("search:a", "a", "new", 10)
        clock.advance(8)

        entry = await memory_store.get("search:a")

        assert entry.value == "new"
        assert await memory_store.size() == 1

    @pytest.mark.asyncio
    async def test_should_delete_entry(self, memory_store):
        """Test delete."""
        await memory_store.put("search:a", "a", "v", 60)

        assert await memory_store.delete("search:a") is True
        assert await memory_store.delete("search:a") is False
        assert await memory_store.get("search:a") is None

    @pytest.mark.asyncio
    async def test_should_clear_all_entries(self, memory_store):
        """Test clear counts removed entries."""
        await memory_store.put("search:a", "a", "v", 60)
        await memory_store.put("search:b", "b", "v", 60)

        assert await memory_store.clear() == 2
        assert await memory_store.size() == 0

    @pytest.mark.asyncio
    async def test_should_purge_expired_entries(self, memory_store, clock):
        """Test purge keeps valid entries."""
        await memory_store.put("search:short", "short", "v", 5)
        await memory_store.put("search:long", "long", "v", 500)
        clock.advance(6)

        assert await memory_store.purge_expired() == 1
        assert await memory_store.get("search:long") is not None

    @pytest.mark.asyncio
    async def test_should_not_share_values_with_callers(self, memory_store):
        """Test mutating a returned value leaves the cached copy intact."""
        stored = await memory_store.put("search:a", "a", {"results": [1]}, 60)
        stored.value["results"].append("from put")

        first = await memory_store.get("search:a")
        first.value["results"].append("from get")

        second = await memory_store.get("search:a")
        assert second.value == {"results": [1]}


class TestBoundedMemoryStore:
    """Test entry bound and eviction."""

    @pytest.mark.asyncio
    async def test_should_evict_least_recently_used(self, clock):
        """Test LRU eviction when full."""
        store = InMemoryCacheStore(max_entries=2, clock=clock)
        await store.put("search:a", "a", "v", 60)
        await store.put("search:b", "b", "v", 60)
        await store.get("search:a")

        await store.put("search:c", "c", "v", 60)

        assert await store.get("search:b") is None
        assert await store.get("search:a") is not None
        assert await store.get("search:c") is not None

    @pytest.mark.asyncio
    async def test_should_drop_stale_entries_before_evicting(self, clock):
        """Test stale entries make room first."""
        store = InMemoryCacheStore(max_entries=2, clock=clock)
        await store.put("search:old", "old", "v", 60)
        await store.put("search:stale", "stale", "v", 1)
        clock.advance(2)

        await store.put("search:new", "new", "v", 60)

        assert await store.get("search:old") is not None
        assert await store.size() == 2

    @pytest.mark.asyncio
    async def test_should_not_evict_when_overwriting(self, clock):
        """Test overwriting a key never evicts another."""
        store = InMemoryCacheStore(max_entries=2, clock=clock)
        await store.put("search:a", "a", "v", 60)
        await store.put("search:b", "b", "v", 60)

        await store.put("search:a", "a", "v2", 60)

        assert await store.get("search:b") is not None
        assert (await store.get("search:a")).value == "v2"
