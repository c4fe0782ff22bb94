"""Models for REST API responses."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Model representing one message of a chat session.

    Attributes:
        role: Who wrote the message, "user" or "assistant".
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(
        description="Author of the message",
        examples=["user", "assistant"],
    )
    content: str = Field(
        description="Message text",
        examples=["What did Apple release?"],
    )


class SourceRef(BaseModel):
    """Model representing a document retrieved from the vector index.

    Attributes:
        id: Point identifier in the vector index.
        score: Similarity score, higher is more relevant.
        payload: Document metadata stored with the vector.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str = Field(description="Document identifier", examples=[1])
    score: float = Field(description="Similarity score", examples=[0.87])
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata",
        examples=[{"title": "Apple unveils new phone", "text": "Apple released..."}],
    )


class RagAnswer(BaseModel):
    """Model representing an answer produced by the RAG pipeline.

    Attributes:
        answer: Generated answer.
        sources: Documents the answer was generated from, best match first.
        cached: Whether the answer was served from the answer cache.
    """

    answer: str = Field(
        description="Generated answer",
        examples=["Apple released a new phone on Tuesday."],
    )
    sources: list[SourceRef] = Field(
        default_factory=list,
        description="Documents used as context, best match first",
    )
    cached: bool = Field(
        False,
        description="Whether the answer was served from the cache",
        examples=[False, True],
    )

    # provides examples for /docs endpoint
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "answer": "Apple released a new phone on Tuesday.",
                    "sources": [
                        {
                            "id": 1,
                            "score": 0.87,
                            "payload": {
                                "title": "Apple unveils new phone",
                                "text": "Apple released a phone",
                            },
                        }
                    ],
                    "cached": False,
                }
            ]
        }
    }


class ChatResponse(BaseModel):
    """Model representing a response to one chat turn.

    Attributes:
        session_id: Session the turn belongs to.
        answer: Generated answer.
        history: Complete session history including this turn.
        sources: Documents the answer was generated from.
        cached: Whether the answer was served from the answer cache.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "sessionId": "507003",
                    "answer": "Apple released a new phone on Tuesday.",
                    "history": [
                        {"role": "user", "content": "What did Apple release?"},
                        {
                            "role": "assistant",
                            "content": "Apple released a new phone on Tuesday.",
                        },
                    ],
                    "sources": [],
                    "cached": False,
                }
            ]
        },
    )

    session_id: str = Field(alias="sessionId", description="Session identifier")
    answer: str = Field(description="Generated answer")
    history: list[Message] = Field(
        default_factory=list, description="Session history, oldest first"
    )
    sources: list[SourceRef] = Field(
        default_factory=list, description="Documents used as context"
    )
    cached: bool = Field(
        False, description="Whether the answer was served from the cache"
    )


class SessionHistoryResponse(BaseModel):
    """Model representing stored history of one session."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "sessionId": "507003",
                    "history": [
                        {"role": "user", "content": "Hi"},
                        {"role": "assistant", "content": "Hello!"},
                    ],
                }
            ]
        },
    )

    session_id: str = Field(alias="sessionId", description="Session identifier")
    history: list[Message] = Field(
        default_factory=list, description="Session history, oldest first"
    )


class SessionClearResponse(BaseModel):
    """Model representing a response to session history removal."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"sessionId": "507003", "cleared": True}]},
    )

    session_id: str = Field(alias="sessionId", description="Session identifier")
    cleared: bool = Field(True, description="Whether the history was cleared")


class SessionSummary(BaseModel):
    """Model describing one stored session.

    Attributes:
        session_id: Session identifier.
        message_count: Number of stored messages.
        expires_in: Seconds until the session expires, None when unknown.
        last_message: Beginning of the most recent message.
    """

    session_id: str
    message_count: int
    expires_in: Optional[int] = None
    last_message: Optional[str] = None


class HealthResponse(BaseModel):
    """Model representing a response to a health request.

    Attributes:
        status: Always "ok" when the service answers.
        message: Human readable status.
        cache: Whether the cache/history backend is reachable.
        vector_index: Address of the vector index.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "status": "ok",
                    "message": "Backend running",
                    "cache": "connected",
                    "vectorIndex": "http://localhost:6333",
                }
            ]
        },
    )

    status: str = Field("ok", description="Service status")
    message: str = Field("Backend running", description="Human readable status")
    cache: Literal["connected", "not_connected"] = Field(
        description="Cache backend connection status"
    )
    vector_index: str = Field(
        alias="vectorIndex", description="Address of the vector index"
    )


class DetailModel(BaseModel):
    """Nested detail model for error responses."""

    response: str = Field(..., description="Short summary of the error")
    cause: str = Field(..., description="Detailed explanation of what caused the error")


class ErrorResponse(BaseModel):
    """Model representing error response for chat and query endpoints."""

    detail: DetailModel

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "Invalid request",
                        "cause": "sessionId and userMessage are required",
                    },
                },
                {
                    "detail": {
                        "response": "Unable to answer the question",
                        "cause": "embeddings service is not available",
                    },
                },
            ]
        }
    }
