"""
Application Services
====================

This module holds the service objects shared by all requests. They are
built from configuration once on startup, stored on ``app.state`` and
handed to endpoint handlers through the ``get_services`` dependency.
"""

from dataclasses import dataclass

from fastapi import Request

from cache.answer_cache import AnswerCache
from cache.kv_store import KeyValueStore
from cache.session_store import SessionHistoryStore
from cache.store_factory import StoreFactory
from errors import DimensionMismatchError, UpstreamUnavailableError
from models.config import Configuration
from services.chat import ConversationController
from services.embeddings import EmbeddingProvider, JinaEmbeddingProvider
from services.generator import AnswerGenerator, GeminiAnswerGenerator
from services.rag import RagOrchestrator
from services.vector_index import QdrantVectorIndex, VectorIndex
from log import get_logger

logger = get_logger("app.state")


@dataclass
class AppServices:  # pylint: disable=too-many-instance-attributes
    """Service objects with an explicit start and shutdown."""

    store: KeyValueStore
    answer_cache: AnswerCache
    sessions: SessionHistoryStore
    embeddings: EmbeddingProvider
    index: VectorIndex
    generator: AnswerGenerator
    orchestrator: RagOrchestrator
    controller: ConversationController

    @classmethod
    def assemble(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        config: Configuration,
        store: KeyValueStore,
        embeddings: EmbeddingProvider,
        index: VectorIndex,
        generator: AnswerGenerator,
    ) -> "AppServices":
        """Wire the pipeline around the given backends."""
        answer_cache = AnswerCache(store, config.answer_cache.ttl)
        sessions = SessionHistoryStore(store, config.sessions.ttl)
        orchestrator = RagOrchestrator(
            answer_cache, embeddings, index, generator, top_k=config.rag.top_k
        )
        controller = ConversationController(
            sessions, orchestrator, session_ttl=config.sessions.ttl
        )
        return cls(
            store=store,
            answer_cache=answer_cache,
            sessions=sessions,
            embeddings=embeddings,
            index=index,
            generator=generator,
            orchestrator=orchestrator,
            controller=controller,
        )

    @classmethod
    def from_configuration(cls, config: Configuration) -> "AppServices":
        """Build all services, raising ConfigurationError on missing credentials."""
        return cls.assemble(
            config,
            store=StoreFactory.key_value_store(config.cache),
            embeddings=JinaEmbeddingProvider(config.embedding),
            index=QdrantVectorIndex(config.vector_index),
            generator=GeminiAnswerGenerator(config.generator),
        )

    async def start(self) -> None:
        """Connect the backends and verify the vector index.

        An unreachable cache or index only degrades the service; an index with
        a different vector size is a fatal misconfiguration.
        """
        await self.store.connect()
        try:
            await self.index.check_dimension()
        except DimensionMismatchError:
            raise
        except UpstreamUnavailableError as e:
            logger.warning("Vector index is not reachable at startup: %s", e)

    async def close(self) -> None:
        """Release all backend connections."""
        await self.embeddings.close()
        await self.index.close()
        await self.generator.close()
        await self.store.close()


def get_services(request: Request) -> AppServices:
    """Return services stored on the application by the lifespan handler."""
    return request.app.state.services
