"""Key-value store that keeps values in Redis."""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from cache.cache_error import CacheError
from cache.kv_store import KeyValueStore
from models.config import RedisConfiguration
from log import get_logger

logger = get_logger("cache.redis_store")


class RedisStore(KeyValueStore):
    """Key-value store backed by Redis.

    Values are plain strings written with `SET key value EX ttl`, so every
    write replaces the value and its expiry in one atomic command. Short
    socket timeouts keep a stalled Redis from blocking requests; any fault
    is reported as `CacheError`.
    """

    def __init__(self, config: RedisConfiguration) -> None:
        """Create a new instance of Redis store."""
        self.redis_config = config
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Initialize connection to Redis.

        An unreachable Redis is not fatal: the client reconnects on the next
        command and until then callers see `CacheError`.
        """
        logger.info("Connecting to storage")
        config = self.redis_config
        self.client = redis.Redis.from_url(
            config.url,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_connect_timeout,
            decode_responses=True,
        )
        if not await self.connected():
            logger.warning("Redis is not reachable, continuing without cache")

    async def connected(self) -> bool:
        """Check if connection to Redis is alive."""
        if self.client is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        try:
            await self.client.ping()
            logger.debug("Connection to storage is ok")
            return True
        except RedisError as e:
            logger.error("Connection to storage is lost: %s", e)
            return False

    def _get_client(self) -> redis.Redis:
        """Return the client or fail if connect() was not called."""
        if self.client is None:
            raise CacheError("cache is disconnected")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key."""
        client = self._get_client()
        try:
            return await client.get(key)
        except RedisError as e:
            raise CacheError(f"GET {key} failed: {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store the value with expiry counted from now."""
        client = self._get_client()
        try:
            await client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheError(f"SET {key} failed: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete the given key."""
        client = self._get_client()
        try:
            return await client.delete(key) > 0
        except RedisError as e:
            raise CacheError(f"DEL {key} failed: {e}") from e

    async def ttl(self, key: str) -> Optional[int]:
        """Return remaining lifetime of the key in seconds."""
        client = self._get_client()
        try:
            remaining = await client.ttl(key)
        except RedisError as e:
            raise CacheError(f"TTL {key} failed: {e}") from e
        # -2: no such key, -1: key without expiry
        return remaining if remaining >= 0 else None

    async def keys(self, prefix: str) -> list[str]:
        """Return all live keys starting with the given prefix."""
        client = self._get_client()
        try:
            return [key async for key in client.scan_iter(match=f"{prefix}*")]
        except RedisError as e:
            raise CacheError(f"SCAN {prefix}* failed: {e}") from e

    async def close(self) -> None:
        """Close the connection pool."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
