"""Exceptions raised by the answer pipeline and its collaborators."""

from typing import Optional


class ConfigurationError(Exception):
    """The service can not start with the configuration provided.

    Raised for missing credentials or backend addresses. The service refuses
    to accept traffic rather than failing every request.
    """


class UpstreamUnavailableError(Exception):
    """An external service (embeddings, vector index, LLM) failed or timed out."""

    def __init__(self, service: str, message: str) -> None:
        """Initialize the error with the name of the failing service."""
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message


class DimensionMismatchError(UpstreamUnavailableError):
    """Embedding vector length does not match the dimension of the index."""

    def __init__(
        self, expected: int, actual: int, collection: Optional[str] = None
    ) -> None:
        """Initialize the error with expected and actual vector dimensions."""
        where = f" of collection '{collection}'" if collection else ""
        super().__init__(
            "vector_index",
            f"vector dimension {actual} does not match dimension {expected}{where}",
        )
        self.expected = expected
        self.actual = actual
