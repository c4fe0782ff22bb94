"""Retrieval-augmented answering of a single question."""

from typing import Optional

from cache.answer_cache import AnswerCache
from models.cache_entry import CacheEntry
from models.responses import RagAnswer
from services.embeddings import EmbeddingProvider
from services.generator import AnswerGenerator
from services.vector_index import VectorIndex
from utils.prompt import PromptTemplate, build_context
import constants
from log import get_logger

logger = get_logger(__name__)


class RagOrchestrator:
    """Answers questions from the indexed documents.

    The orchestrator holds no per-request state; all collaborators are
    injected at startup. Upstream failures propagate unchanged, there are no
    retries and nothing is cached for a failed question.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        answer_cache: AnswerCache,
        embeddings: EmbeddingProvider,
        index: VectorIndex,
        generator: AnswerGenerator,
        top_k: int = constants.DEFAULT_TOP_K,
        template: Optional[PromptTemplate] = None,
    ) -> None:
        """Create the orchestrator from its collaborators."""
        self.answer_cache = answer_cache
        self.embeddings = embeddings
        self.index = index
        self.generator = generator
        self.top_k = top_k
        self.template = template or PromptTemplate()

    async def answer(self, query: str) -> RagAnswer:
        """Answer the question, serving repeated questions from the cache."""
        cached = await self.answer_cache.get(query)
        if cached is not None:
            return RagAnswer(answer=cached.answer, sources=cached.sources, cached=True)

        vector = await self.embeddings.embed(query, constants.EMBEDDING_MODE_QUERY)
        sources = await self.index.search(vector, self.top_k)
        if not sources:
            logger.info("No documents found for the question")

        prompt = self.template.render(context=build_context(sources), question=query)
        answer = await self.generator.generate(prompt)

        result = RagAnswer(answer=answer, sources=sources, cached=False)
        if self.generator.configured:
            await self.answer_cache.put(
                query, CacheEntry(answer=result.answer, sources=result.sources)
            )
        return result
