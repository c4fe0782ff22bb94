"""Chat turns on top of the session history and the RAG pipeline."""

import constants
from cache.session_store import SessionHistoryStore
from models.responses import ChatResponse, Message
from services.rag import RagOrchestrator
from log import get_logger

logger = get_logger(__name__)


class ConversationController:
    """Runs one chat turn and records it in the session history.

    A turn loads the history, answers the message and saves the history
    extended by both messages. When answering fails the exception
    propagates and the stored history stays untouched.
    """

    def __init__(
        self,
        sessions: SessionHistoryStore,
        orchestrator: RagOrchestrator,
        session_ttl: int = constants.DEFAULT_SESSION_TTL,
    ) -> None:
        """Create the controller."""
        self.sessions = sessions
        self.orchestrator = orchestrator
        self.session_ttl = session_ttl

    async def turn(self, session_id: str, user_message: str) -> ChatResponse:
        """Answer the user message within the session."""
        history = await self.sessions.load(session_id)
        history.append(Message(role="user", content=user_message))

        # prior turns are recorded but not passed to the orchestrator
        result = await self.orchestrator.answer(user_message)

        history.append(Message(role="assistant", content=result.answer))
        await self.sessions.save(session_id, history, self.session_ttl)
        logger.debug("Session %s now has %d messages", session_id, len(history))

        return ChatResponse(
            session_id=session_id,
            answer=result.answer,
            history=history,
            sources=result.sources,
            cached=result.cached,
        )

    async def history(self, session_id: str) -> list[Message]:
        """Return the session history, oldest message first."""
        return await self.sessions.load(session_id)

    async def clear(self, session_id: str) -> None:
        """Forget the session history."""
        await self.sessions.clear(session_id)
