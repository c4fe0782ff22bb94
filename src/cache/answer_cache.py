"""Query-answer cache on top of a key-value store."""

from typing import Optional

from pydantic import ValidationError

import constants
import metrics
from cache.cache_error import CacheError
from cache.kv_store import KeyValueStore
from models.cache_entry import CacheEntry
from log import get_logger

logger = get_logger("cache.answer_cache")


def normalize_query(query: str) -> str:
    """Canonicalize query text so that trivially different inputs share a key.

    Surrounding whitespace is removed and the text is lowercased. Inner
    whitespace is kept, so paraphrases always miss.
    """
    return query.strip().lower()


def answer_cache_key(query: str) -> str:
    """Return the storage key for the given raw query."""
    return f"{constants.ANSWER_CACHE_KEY_PREFIX}{normalize_query(query)}"


class AnswerCache:
    """Maps normalized queries to previously generated answers.

    This is the fast path of every request, so it never fails the request:
    backend faults and unreadable values are logged and treated as a miss,
    and writes are best effort.
    """

    def __init__(
        self, store: KeyValueStore, ttl: int = constants.DEFAULT_ANSWER_CACHE_TTL
    ) -> None:
        """Create the cache over the given store with a fixed entry lifetime."""
        self.store = store
        self.ttl = ttl

    async def get(self, query: str) -> Optional[CacheEntry]:
        """Return the cached entry for the query or None on a miss."""
        key = answer_cache_key(query)
        try:
            raw = await self.store.get(key)
        except CacheError as e:
            logger.warning("Answer cache lookup failed, treating as miss: %s", e)
            metrics.cache_degraded_operations_total.labels("answer_cache", "get").inc()
            metrics.answer_cache_misses_total.inc()
            return None

        if raw is None:
            metrics.answer_cache_misses_total.inc()
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed answer cache entry %s: %s", key, e)
            metrics.answer_cache_misses_total.inc()
            return None

        logger.debug("Answer cache hit for %s", key)
        metrics.answer_cache_hits_total.inc()
        return entry

    async def put(self, query: str, entry: CacheEntry) -> None:
        """Store the entry under the normalized query, replacing any older one."""
        key = answer_cache_key(query)
        try:
            await self.store.set(key, entry.model_dump_json(), self.ttl)
        except CacheError as e:
            logger.warning("Unable to store answer in cache: %s", e)
            metrics.cache_degraded_operations_total.labels("answer_cache", "put").inc()
