"""Typed view of documents stored in the vector index."""

import json
from typing import Any

from pydantic import BaseModel

# payload fields probed, in order, for the document title and body
TITLE_FIELDS = ("title", "headline")
BODY_FIELDS = ("text", "content", "body")


class Document(BaseModel):
    """Document rendered into the answer context.

    Attributes:
        title: Document title shown as the block header.
        body: Document text.
    """

    title: str
    body: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None, position: int) -> "Document":
        """Map a heterogeneous upstream payload to a document.

        Args:
            payload: Metadata stored with the vector (may be None).
            position: Zero-based position of the document in the result list,
                used for the fallback title.

        Returns:
            Document with a title (or "Article N") and a body (or the
            serialized payload when no text field is present).
        """
        payload = payload or {}
        title = _first_text(payload, TITLE_FIELDS) or f"Article {position + 1}"
        body = _first_text(payload, BODY_FIELDS)
        if body is None:
            body = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
        return cls(title=title, body=body)

    def to_block(self) -> str:
        """Render the document as one block of the context."""
        return f"### {self.title}\n{self.body}"


def _first_text(payload: dict[str, Any], fields: tuple[str, ...]) -> str | None:
    """Return the first non-empty string value among the given fields."""
    for field in fields:
        value = payload.get(field)
        if isinstance(value, str) and value:
            return value
    return None
