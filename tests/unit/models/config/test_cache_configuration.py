"""Unit tests for cache and history backend configuration models."""

import pytest

from pydantic import ValidationError

import constants
from models.config import (
    AnswerCacheConfiguration,
    CacheConfiguration,
    InMemoryCacheConfig,
    RedisConfiguration,
    SessionConfiguration,
)


def test_cache_configuration_default() -> None:
    """Test that Redis is the default backend with default settings."""
    cfg = CacheConfiguration()
    assert cfg.type == constants.CACHE_TYPE_REDIS
    assert cfg.redis == RedisConfiguration()
    assert cfg.redis.url == "redis://localhost:6379"
    assert cfg.redis.socket_timeout == 0.5
    assert cfg.memory is None


def test_cache_configuration_memory() -> None:
    """Test that memory backend gets its default settings."""
    cfg = CacheConfiguration(type=constants.CACHE_TYPE_MEMORY)
    assert cfg.memory == InMemoryCacheConfig()
    assert cfg.memory.max_entries == 10000
    assert cfg.redis is None


def test_cache_configuration_noop() -> None:
    """Test the no-op backend."""
    cfg = CacheConfiguration(type=constants.CACHE_TYPE_NOOP)
    assert cfg.redis is None
    assert cfg.memory is None


def test_cache_configuration_wrong_backend_settings() -> None:
    """Test that settings of other backend than the selected one are refused."""
    with pytest.raises(ValidationError, match="Only Redis cache config must be provided"):
        CacheConfiguration(type="redis", memory=InMemoryCacheConfig())

    with pytest.raises(ValidationError, match="Only memory cache config must be provided"):
        CacheConfiguration(type="memory", redis=RedisConfiguration())

    with pytest.raises(ValidationError, match="No-op cache does not accept backend config"):
        CacheConfiguration(type="noop", redis=RedisConfiguration())


def test_cache_configuration_unknown_type() -> None:
    """Test that unknown backend types are refused."""
    with pytest.raises(ValidationError):
        CacheConfiguration(type="memcached")


def test_redis_configuration_url_scheme() -> None:
    """Test the Redis URL validation."""
    assert RedisConfiguration(url="rediss://cache:6380/0").url == "rediss://cache:6380/0"

    with pytest.raises(ValidationError, match="Invalid Redis URL"):
        RedisConfiguration(url="http://localhost:6379")


def test_redis_configuration_timeouts() -> None:
    """Test that timeouts must be positive."""
    with pytest.raises(ValidationError, match="Input should be greater than 0"):
        RedisConfiguration(socket_timeout=0)


def test_ttl_defaults() -> None:
    """Test default lifetimes of answers and sessions."""
    assert AnswerCacheConfiguration().ttl == 600
    assert SessionConfiguration().ttl == 3600

    with pytest.raises(ValidationError, match="Input should be greater than 0"):
        SessionConfiguration(ttl=0)
