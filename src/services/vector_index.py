"""Vector index backed by a Qdrant collection."""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional

import httpx
from qdrant_client import AsyncQdrantClient, models
from qdrant_client.http.exceptions import (
    ResponseHandlingException,
    UnexpectedResponse,
)

import constants
import metrics
from errors import DimensionMismatchError, UpstreamUnavailableError
from models.config import VectorIndexConfiguration
from models.responses import SourceRef
from log import get_logger

logger = get_logger(__name__)

# errors raised by qdrant-client for unreachable or failing servers
QDRANT_ERRORS = (UnexpectedResponse, ResponseHandlingException, httpx.HTTPError)

DISTANCES = {
    constants.SIMILARITY_METRIC_COSINE: models.Distance.COSINE,
    "dot": models.Distance.DOT,
    "euclid": models.Distance.EUCLID,
}


class IndexPoint(NamedTuple):
    """Point to store: identifier, vector and payload."""

    id: int | str
    vector: list[float]
    payload: dict[str, Any]


class VectorIndex(ABC):
    """Stores document vectors and answers nearest-neighbour queries."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Human readable location of the index."""

    @abstractmethod
    async def create_index(
        self, dimension: int, metric: str = constants.SIMILARITY_METRIC_COSINE
    ) -> None:
        """Create an empty index, replacing the existing one."""

    @abstractmethod
    async def upsert(self, points: list[IndexPoint]) -> None:
        """Insert or replace points."""

    @abstractmethod
    async def search(self, vector: list[float], k: int) -> list[SourceRef]:
        """Return up to k nearest documents, most similar first."""

    @abstractmethod
    async def check_dimension(self) -> None:
        """Verify the stored vector size matches the configured dimension."""

    async def close(self) -> None:
        """Release resources held by the index."""


class QdrantVectorIndex(VectorIndex):
    """Vector index stored in one Qdrant collection."""

    def __init__(
        self,
        config: VectorIndexConfiguration,
        client: Optional[AsyncQdrantClient] = None,
    ) -> None:
        """Create the index over the configured collection."""
        self.config = config
        if client is None:
            api_key = (
                config.api_key.get_secret_value() if config.api_key is not None else None
            )
            client = AsyncQdrantClient(
                url=config.url, api_key=api_key, timeout=config.timeout
            )
        self.client = client

    @property
    def address(self) -> str:
        """URL of the Qdrant server."""
        return self.config.url

    @property
    def collection(self) -> str:
        """Name of the collection."""
        return self.config.collection

    def _unavailable(self, e: Exception) -> UpstreamUnavailableError:
        metrics.upstream_failures_total.labels("vector_index").inc()
        logger.error("Vector index request failed: %s", e)
        return UpstreamUnavailableError("vector_index", str(e) or type(e).__name__)

    async def create_index(
        self, dimension: int, metric: str = constants.SIMILARITY_METRIC_COSINE
    ) -> None:
        """Drop the collection if it exists and create it empty."""
        if metric not in DISTANCES:
            raise ValueError(f"Unsupported similarity metric: {metric}")
        try:
            if await self.client.collection_exists(self.collection):
                logger.info("Deleting existing collection %s", self.collection)
                await self.client.delete_collection(self.collection)
            await self.client.create_collection(
                collection_name=self.collection,
                vectors_config=models.VectorParams(
                    size=dimension, distance=DISTANCES[metric]
                ),
            )
        except QDRANT_ERRORS as e:
            raise self._unavailable(e) from e
        logger.info(
            "Created collection %s (dimension %d, %s)", self.collection, dimension, metric
        )

    async def upsert(self, points: list[IndexPoint]) -> None:
        """Store the points and wait until they are indexed."""
        for point in points:
            if len(point.vector) != self.config.dimension:
                raise DimensionMismatchError(
                    self.config.dimension, len(point.vector), self.collection
                )
        try:
            await self.client.upsert(
                collection_name=self.collection,
                points=[
                    models.PointStruct(id=p.id, vector=p.vector, payload=p.payload)
                    for p in points
                ],
                wait=True,
            )
        except QDRANT_ERRORS as e:
            raise self._unavailable(e) from e

    async def search(self, vector: list[float], k: int) -> list[SourceRef]:
        """Return up to k nearest documents with their payloads."""
        if len(vector) != self.config.dimension:
            raise DimensionMismatchError(
                self.config.dimension, len(vector), self.collection
            )
        try:
            response = await self.client.query_points(
                collection_name=self.collection,
                query=vector,
                limit=k,
                with_payload=True,
                with_vectors=False,
            )
        except QDRANT_ERRORS as e:
            raise self._unavailable(e) from e

        results = [
            SourceRef(id=point.id, score=point.score, payload=point.payload or {})
            for point in response.points
        ]
        results.sort(key=lambda source: source.score, reverse=True)
        return results

    async def check_dimension(self) -> None:
        """Compare vector size of the live collection with configuration.

        A missing collection is only logged; it is created by ingestion.
        """
        try:
            if not await self.client.collection_exists(self.collection):
                logger.warning(
                    "Collection %s does not exist yet, run ingestion first",
                    self.collection,
                )
                return
            info = await self.client.get_collection(self.collection)
        except QDRANT_ERRORS as e:
            raise self._unavailable(e) from e

        vectors = info.config.params.vectors
        if isinstance(vectors, models.VectorParams):
            size = vectors.size
        else:
            # named vectors are not used by this service
            logger.warning(
                "Collection %s uses named vectors, skipping dimension check",
                self.collection,
            )
            return
        if size != self.config.dimension:
            raise DimensionMismatchError(self.config.dimension, size, self.collection)

    async def close(self) -> None:
        """Close the Qdrant client."""
        await self.client.close()
