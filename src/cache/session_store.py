"""Session history store on top of a key-value store."""

from typing import Optional

from pydantic import TypeAdapter, ValidationError

import constants
import metrics
from cache.cache_error import CacheError
from cache.kv_store import KeyValueStore
from models.responses import Message, SessionSummary
from log import get_logger

logger = get_logger("cache.session_store")

_messages_adapter = TypeAdapter(list[Message])


def session_key(session_id: str) -> str:
    """Return the storage key for the given session."""
    return f"{constants.SESSION_KEY_PREFIX}{session_id}"


class SessionHistoryStore:
    """Keeps the ordered message list of every chat session.

    The whole list is stored as one JSON value. Appending a turn is a
    read-modify-write done by the caller (`load`, extend, `save`), so two
    concurrent turns of the same session race and the later `save` wins.
    That is acceptable for one user per session; multi-writer sessions would
    need an atomic append behind this interface.

    Backend faults never reach the caller: reads return an empty history
    and writes are skipped, both with a warning.
    """

    def __init__(
        self, store: KeyValueStore, ttl: int = constants.DEFAULT_SESSION_TTL
    ) -> None:
        """Create the history store with the default session lifetime."""
        self.store = store
        self.ttl = ttl

    async def load(self, session_id: str) -> list[Message]:
        """Return stored history of the session, oldest message first.

        Unknown, expired and malformed sessions yield an empty list.
        """
        key = session_key(session_id)
        try:
            raw = await self.store.get(key)
        except CacheError as e:
            logger.warning("Unable to load history of session %s: %s", session_id, e)
            metrics.cache_degraded_operations_total.labels("sessions", "load").inc()
            return []

        if raw is None:
            return []

        try:
            return _messages_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("Failed to parse history of session %s: %s", session_id, e)
            return []

    async def save(
        self,
        session_id: str,
        messages: list[Message],
        ttl_seconds: Optional[int] = None,
    ) -> None:
        """Replace stored history of the session and restart its expiry.

        Args:
            session_id: Session identifier.
            messages: Complete history to store.
            ttl_seconds: Idle lifetime of the session, the store default when None.
        """
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl
        payload = _messages_adapter.dump_json(messages).decode("utf-8")
        try:
            await self.store.set(session_key(session_id), payload, ttl)
        except CacheError as e:
            logger.warning("Unable to save history of session %s: %s", session_id, e)
            metrics.cache_degraded_operations_total.labels("sessions", "save").inc()

    async def clear(self, session_id: str) -> None:
        """Delete stored history of the session."""
        try:
            deleted = await self.store.delete(session_key(session_id))
        except CacheError as e:
            logger.warning("Unable to clear history of session %s: %s", session_id, e)
            metrics.cache_degraded_operations_total.labels("sessions", "clear").inc()
            return
        logger.info(
            "History of session %s %s",
            session_id,
            "cleared" if deleted else "was already empty",
        )

    async def describe(self, session_id: str) -> Optional[SessionSummary]:
        """Summarize the stored session or return None when it does not exist."""
        messages = await self.load(session_id)
        if not messages:
            return None
        try:
            expires_in = await self.store.ttl(session_key(session_id))
        except CacheError as e:
            logger.warning("Unable to read expiry of session %s: %s", session_id, e)
            expires_in = None
        return SessionSummary(
            session_id=session_id,
            message_count=len(messages),
            expires_in=expires_in,
            last_message=messages[-1].content[: constants.SESSION_PREVIEW_LENGTH],
        )

    async def list_sessions(self) -> list[SessionSummary]:
        """Summarize all live sessions."""
        try:
            keys = await self.store.keys(constants.SESSION_KEY_PREFIX)
        except CacheError as e:
            logger.warning("Unable to list sessions: %s", e)
            return []

        summaries = []
        for key in sorted(keys):
            summary = await self.describe(key[len(constants.SESSION_KEY_PREFIX) :])
            if summary is not None:
                summaries.append(summary)
        return summaries
