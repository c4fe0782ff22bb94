"""Key-value store factory class."""

import constants
from models.config import CacheConfiguration
from cache.kv_store import KeyValueStore
from cache.noop_store import NoopStore
from cache.in_memory_store import InMemoryStore
from cache.redis_store import RedisStore
from log import get_logger

logger = get_logger("cache.store_factory")


# pylint: disable=R0903
class StoreFactory:
    """Key-value store factory class."""

    @staticmethod
    def key_value_store(config: CacheConfiguration) -> KeyValueStore:
        """Create an instance of KeyValueStore based on loaded configuration.

        Returns:
            An instance of `KeyValueStore` (either `RedisStore`, `InMemoryStore` or `NoopStore`).
        """
        logger.info("Creating cache instance of type %s", config.type)
        match config.type:
            case constants.CACHE_TYPE_NOOP:
                return NoopStore()
            case constants.CACHE_TYPE_MEMORY:
                if config.memory is not None:
                    return InMemoryStore(config.memory)
                raise ValueError("Expecting configuration for in-memory cache")
            case constants.CACHE_TYPE_REDIS:
                if config.redis is not None:
                    return RedisStore(config.redis)
                raise ValueError("Expecting configuration for Redis cache")
            case None:
                raise ValueError("Cache type must be set")
            case _:
                raise ValueError(
                    f"Invalid cache type: {config.type}. "
                    f"Use '{constants.CACHE_TYPE_REDIS}' '{constants.CACHE_TYPE_MEMORY}' "
                    f"or '{constants.CACHE_TYPE_NOOP}' options."
                )
