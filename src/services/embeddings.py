"""Embedding provider backed by the Jina embeddings API."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

import aiohttp
from typing_extensions import Literal

import constants
import metrics
from errors import ConfigurationError, UpstreamUnavailableError
from models.config import EmbeddingConfiguration
from log import get_logger

logger = get_logger(__name__)

EmbeddingMode = Literal["query", "document"]


class EmbeddingProvider(ABC):
    """Converts text into a fixed-length vector."""

    @abstractmethod
    async def embed(self, text: str, mode: EmbeddingMode) -> list[float]:
        """Return embedding of the text.

        Args:
            text: Text to embed.
            mode: "query" for short search queries, "document" for stored
                documents.
        """

    async def close(self) -> None:
        """Release resources held by the provider."""


class JinaEmbeddingProvider(EmbeddingProvider):
    """Embedding provider that calls the Jina embeddings REST API.

    One `aiohttp.ClientSession` is shared by all requests; it is created on
    first use inside the running event loop and closed by `close()`.
    """

    def __init__(self, config: EmbeddingConfiguration) -> None:
        """Create the provider, failing when the API key is missing."""
        if config.api_key is None or not config.api_key.get_secret_value():
            raise ConfigurationError(
                "Embedding API key is not set (embedding.api_key or "
                "RAG_CHAT_EMBEDDING__API_KEY)"
            )
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            api_key = self.config.api_key.get_secret_value()  # type: ignore[union-attr]
            self._session = aiohttp.ClientSession(
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )
        return self._session

    def request_body(self, text: str, mode: EmbeddingMode) -> dict[str, Any]:
        """Build the JSON body of an embeddings request."""
        return {
            "model": self.config.model,
            "task": constants.EMBEDDING_TASKS[mode],
            "input": [{"text": text}],
        }

    async def embed(self, text: str, mode: EmbeddingMode) -> list[float]:
        """Return embedding of the text computed by Jina."""
        session = self._get_session()
        try:
            async with session.post(
                self.config.url, json=self.request_body(text, mode)
            ) as resp:
                resp.raise_for_status()
                data = await resp.json()
        # ValueError covers response bodies that are not valid JSON
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            metrics.upstream_failures_total.labels("embeddings").inc()
            logger.error("Embedding request failed: %s", e)
            raise UpstreamUnavailableError("embeddings", str(e) or "timeout") from e

        embedding = extract_embedding(data)
        if embedding is None:
            metrics.upstream_failures_total.labels("embeddings").inc()
            raise UpstreamUnavailableError("embeddings", "no embedding returned")
        return embedding

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None


def extract_embedding(data: Any) -> Optional[list[float]]:
    """Pull the first embedding out of a Jina response body."""
    try:
        embedding = data["data"][0]["embedding"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(embedding, list) or not embedding:
        return None
    return embedding
