"""Unit tests for InMemoryStore class."""

import pytest

from cache.in_memory_store import InMemoryStore
from models.config import InMemoryCacheConfig


@pytest.mark.asyncio
async def test_connect(memory_store: InMemoryStore) -> None:
    """Test the behavior of connect and connected methods."""
    await memory_store.connect()
    assert await memory_store.connected() is True


@pytest.mark.asyncio
async def test_set_get(memory_store: InMemoryStore) -> None:
    """Test that stored value is returned until it expires."""
    await memory_store.set("key", "value", 60)
    assert await memory_store.get("key") == "value"
    assert await memory_store.get("other") is None


@pytest.mark.asyncio
async def test_set_replaces_value_and_expiry(memory_store: InMemoryStore, clock) -> None:
    """Test that a write replaces both value and expiry."""
    await memory_store.set("key", "old", 10)
    clock.advance(5)
    await memory_store.set("key", "new", 60)
    clock.advance(30)
    assert await memory_store.get("key") == "new"
    assert await memory_store.ttl("key") == 30


@pytest.mark.asyncio
async def test_value_expires(memory_store: InMemoryStore, clock) -> None:
    """Test that values disappear once their lifetime elapses."""
    await memory_store.set("key", "value", 60)
    clock.advance(59)
    assert await memory_store.get("key") == "value"
    assert await memory_store.ttl("key") == 1

    clock.advance(1)
    assert await memory_store.get("key") is None
    assert await memory_store.ttl("key") is None
    assert await memory_store.keys("") == []


@pytest.mark.asyncio
async def test_delete(memory_store: InMemoryStore) -> None:
    """Test deleting existing and unknown keys."""
    await memory_store.set("key", "value", 60)
    assert await memory_store.delete("key") is True
    assert await memory_store.get("key") is None
    assert await memory_store.delete("key") is False


@pytest.mark.asyncio
async def test_keys_with_prefix(memory_store: InMemoryStore) -> None:
    """Test listing keys of one namespace."""
    await memory_store.set("session:1", "[]", 60)
    await memory_store.set("session:2", "[]", 60)
    await memory_store.set("cache:news", "{}", 60)
    assert sorted(await memory_store.keys("session:")) == ["session:1", "session:2"]
    assert await memory_store.keys("cache:") == ["cache:news"]


@pytest.mark.asyncio
async def test_least_recently_used_key_is_evicted(clock) -> None:
    """Test that the store never grows over its capacity."""
    store = InMemoryStore(InMemoryCacheConfig(max_entries=2), timer=clock)
    await store.set("a", "1", 60)
    await store.set("b", "2", 60)
    # touch "a" so that "b" becomes the least recently used key
    assert await store.get("a") == "1"
    await store.set("c", "3", 60)

    assert await store.get("a") == "1"
    assert await store.get("b") is None
    assert await store.get("c") == "3"


@pytest.mark.asyncio
async def test_close_drops_values(memory_store: InMemoryStore) -> None:
    """Test that closing the store drops its content."""
    await memory_store.set("key", "value", 60)
    await memory_store.close()
    assert await memory_store.get("key") is None
