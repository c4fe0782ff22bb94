"""Model for query-answer cache entry."""

from pydantic import BaseModel, Field

from models.responses import SourceRef


class CacheEntry(BaseModel):
    """Model representing a cached answer.

    Stored as a single JSON value under the normalized query. Entries expire
    with the key and are never updated in place.

    Attributes:
        answer: The generated answer
        sources: Documents retrieved for the query, best match first
    """

    answer: str
    sources: list[SourceRef] = Field(default_factory=list)
