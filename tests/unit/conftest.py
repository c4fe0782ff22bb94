"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import math

import pytest

from cache.answer_cache import AnswerCache
from cache.cache_error import CacheError
from cache.in_memory_store import InMemoryStore
from cache.kv_store import KeyValueStore
from cache.session_store import SessionHistoryStore
from errors import DimensionMismatchError
from models.config import InMemoryCacheConfig
from models.responses import SourceRef
from services.embeddings import EmbeddingProvider
from services.chat import ConversationController
from services.generator import AnswerGenerator
from services.rag import RagOrchestrator
from services.vector_index import IndexPoint, VectorIndex

# words mapped to the axes of the fake embedding space
VOCABULARY = ("apple", "weather", "phone", "sunny")


class FakeClock:
    """Manually advanced clock for the in-memory store."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeEmbeddings(EmbeddingProvider):
    """Bag-of-words embedding over a tiny vocabulary."""

    def __init__(self, dimension: int = len(VOCABULARY)) -> None:
        self.dimension = dimension
        self.calls: list[tuple[str, str]] = []

    def vector_of(self, text: str) -> list[float]:
        """Return the embedding without recording a call."""
        words = text.lower()
        vector = [float(words.count(word)) for word in VOCABULARY]
        vector += [0.0] * (self.dimension - len(vector))
        # keep the vector non-zero for cosine similarity
        vector[-1] += 0.01
        return vector[: self.dimension]

    async def embed(self, text, mode):
        self.calls.append((text, mode))
        return self.vector_of(text)


class FakeIndex(VectorIndex):
    """Exact cosine search over points kept in a dict."""

    def __init__(self, dimension: int = len(VOCABULARY)) -> None:
        self.dimension = dimension
        self.points: dict[int | str, IndexPoint] = {}
        self.searches = 0
        self.closed = False

    @property
    def address(self):
        return "memory://fake-index"

    async def create_index(self, dimension, metric="cosine"):
        self.dimension = dimension
        self.points = {}

    async def upsert(self, points):
        for point in points:
            self.points[point.id] = point

    async def search(self, vector, k):
        if len(vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(vector))
        self.searches += 1
        scored = [
            SourceRef(id=p.id, score=_cosine(vector, p.vector), payload=p.payload)
            for p in self.points.values()
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored[:k]

    async def check_dimension(self):
        return None

    async def close(self):
        self.closed = True


class EchoGenerator(AnswerGenerator):
    """Generator answering with the context it received."""

    def __init__(self) -> None:
        self.prompts: list[str] = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        context = prompt.split("Context:\n", 1)[1].split("\n\nUser question:", 1)[0]
        return f"Based on the articles: {context}"


class BrokenStore(KeyValueStore):
    """Store whose backend is always unreachable."""

    async def connect(self):
        return None

    async def connected(self):
        return False

    async def get(self, key):
        raise CacheError("connection refused")

    async def set(self, key, value, ttl_seconds):
        raise CacheError("connection refused")

    async def delete(self, key):
        raise CacheError("connection refused")

    async def ttl(self, key):
        raise CacheError("connection refused")

    async def keys(self, prefix):
        raise CacheError("connection refused")

    async def close(self):
        return None


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


ARTICLES = [
    {"id": 1, "title": "Apple news", "text": "Apple released a phone"},
    {"id": 2, "title": "Weather report", "text": "Weather is sunny"},
]


@pytest.fixture(name="clock")
def clock_fixture() -> FakeClock:
    """Clock driving expiry of the in-memory store."""
    return FakeClock()


@pytest.fixture(name="memory_store")
def memory_store_fixture(clock: FakeClock) -> InMemoryStore:
    """In-memory store using the fake clock."""
    return InMemoryStore(InMemoryCacheConfig(max_entries=100), timer=clock)


@pytest.fixture(name="broken_store")
def broken_store_fixture() -> BrokenStore:
    """Store simulating an unreachable backend."""
    return BrokenStore()


@pytest.fixture(name="answer_cache")
def answer_cache_fixture(memory_store: InMemoryStore) -> AnswerCache:
    """Answer cache over the in-memory store."""
    return AnswerCache(memory_store, ttl=600)


@pytest.fixture(name="session_store")
def session_store_fixture(memory_store: InMemoryStore) -> SessionHistoryStore:
    """Session history store over the in-memory store."""
    return SessionHistoryStore(memory_store, ttl=3600)


@pytest.fixture(name="embeddings")
def embeddings_fixture() -> FakeEmbeddings:
    """Deterministic embedding provider."""
    return FakeEmbeddings()


@pytest.fixture(name="generator")
def generator_fixture() -> EchoGenerator:
    """Generator echoing its context."""
    return EchoGenerator()


@pytest.fixture(name="index")
def index_fixture(embeddings: FakeEmbeddings) -> FakeIndex:
    """Index holding two articles about Apple and weather."""
    index = FakeIndex()
    for article in ARTICLES:
        vector = embeddings.vector_of(article["text"])
        index.points[article["id"]] = IndexPoint(article["id"], vector, dict(article))
    return index


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(
    answer_cache: AnswerCache,
    embeddings: FakeEmbeddings,
    index: FakeIndex,
    generator: EchoGenerator,
) -> RagOrchestrator:
    """Orchestrator over the fakes retrieving one document per question."""
    return RagOrchestrator(answer_cache, embeddings, index, generator, top_k=1)


@pytest.fixture(name="controller")
def controller_fixture(
    session_store: SessionHistoryStore, orchestrator: RagOrchestrator
) -> ConversationController:
    """Conversation controller over the in-memory session store."""
    return ConversationController(session_store, orchestrator, session_ttl=3600)
