"""Loading of news articles into the vector index."""

import json
from pathlib import Path
from typing import Any

import constants
from models.document import Document
from services.embeddings import EmbeddingProvider
from services.vector_index import IndexPoint, VectorIndex
from utils.checks import InvalidConfigurationError, file_check
from log import get_logger

logger = get_logger(__name__)


def load_articles(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of article objects from the file."""
    file_check(Path(path), "Articles file")
    with open(path, encoding="utf-8") as fin:
        articles = json.load(fin)
    if not isinstance(articles, list) or not all(
        isinstance(article, dict) for article in articles
    ):
        raise InvalidConfigurationError(
            f"Articles file '{path}' must contain a JSON array of objects"
        )
    return articles


class Ingestor:
    """Embeds articles and stores them in the vector index.

    Every article is mapped to a `Document` once, and its normalized title
    and body are stored in the payload next to the original fields.
    """

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        index: VectorIndex,
        dimension: int = constants.DEFAULT_EMBEDDING_DIMENSION,
    ) -> None:
        """Create the ingestor."""
        self.embeddings = embeddings
        self.index = index
        self.dimension = dimension

    async def ingest(self, articles: list[dict[str, Any]], recreate: bool = True) -> int:
        """Store the articles and return the number of stored points."""
        if recreate:
            await self.index.create_index(
                self.dimension, constants.SIMILARITY_METRIC_COSINE
            )

        points = []
        for position, article in enumerate(articles):
            document = Document.from_payload(article, position)
            logger.info("Embedding: %s", document.title)
            vector = await self.embeddings.embed(
                document.body, constants.EMBEDDING_MODE_DOCUMENT
            )
            payload = {**article, "title": document.title, "body": document.body}
            points.append(IndexPoint(article.get("id", position + 1), vector, payload))

        if points:
            await self.index.upsert(points)
        logger.info("Stored %d articles in %s", len(points), self.index.address)
        return len(points)
