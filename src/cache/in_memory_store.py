"""In-memory key-value store implementation."""

import time
from typing import Callable, NamedTuple, Optional

from cachetools import TLRUCache

from cache.kv_store import KeyValueStore
from models.config import InMemoryCacheConfig
from log import get_logger

logger = get_logger("cache.in_memory_store")


class _Item(NamedTuple):
    """Stored value together with its absolute expiry time."""

    value: str
    expires_at: float


def _time_to_use(_key: str, item: _Item, _now: float) -> float:
    """Return expiry time of the item for TLRUCache."""
    return item.expires_at


class InMemoryStore(KeyValueStore):
    """Process-local store with per-key expiry.

    Values live in a `cachetools.TLRUCache`; when the store is full the least
    recently used key is evicted. The clock is injectable so that expiry can
    be driven from tests.
    """

    def __init__(
        self,
        config: InMemoryCacheConfig,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create a new instance of in-memory store."""
        self.cache_config = config
        self._timer = timer
        self._data: TLRUCache[str, _Item] = TLRUCache(
            maxsize=config.max_entries, ttu=_time_to_use, timer=timer
        )

    async def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Connecting to storage")

    async def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return True

    async def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key."""
        item = self._data.get(key)
        return item.value if item is not None else None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store the value with expiry counted from now."""
        self._data[key] = _Item(value, self._timer() + ttl_seconds)

    async def delete(self, key: str) -> bool:
        """Delete the given key."""
        return self._data.pop(key, None) is not None

    async def ttl(self, key: str) -> Optional[int]:
        """Return remaining lifetime of the key in seconds."""
        item = self._data.get(key)
        if item is None:
            return None
        return max(0, int(item.expires_at - self._timer()))

    async def keys(self, prefix: str) -> list[str]:
        """Return all live keys starting with the given prefix."""
        self._data.expire()
        return [key for key in list(self._data) if key.startswith(prefix)]

    async def close(self) -> None:
        """Drop all stored values."""
        self._data.clear()
