"""Models for REST API requests."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Model representing one chat turn sent by the UI.

    Both fields are optional at the schema level so that the handler can
    answer a missing or blank field with HTTP 400 instead of 422.

    Attributes:
        session_id: Caller-generated session identifier, string or number.
        user_message: The user's message.

    Example:
        ```python
        chat_request = ChatRequest(sessionId="507003", userMessage="Latest news?")
        ```
    """

    session_id: Optional[str] = Field(
        None,
        alias="sessionId",
        description="Caller-generated session identifier",
        examples=["507003"],
    )

    user_message: Optional[str] = Field(
        None,
        alias="userMessage",
        description="The user's message",
        examples=["What did Apple release?"],
    )

    # provides examples for /docs endpoint
    model_config = ConfigDict(
        populate_by_name=True,
        # UI clients may send the session id as a JSON number
        coerce_numbers_to_str=True,
        json_schema_extra={
            "examples": [
                {
                    "sessionId": "507003",
                    "userMessage": "What did Apple release?",
                }
            ]
        },
    )

    def is_valid(self) -> bool:
        """Check that both fields are present and not blank."""
        return bool(
            self.session_id
            and self.session_id.strip()
            and self.user_message
            and self.user_message.strip()
        )


class QueryRequest(BaseModel):
    """Model representing a single question without a chat session.

    Attributes:
        query: The question.
    """

    query: Optional[str] = Field(
        None,
        description="The question",
        examples=["What did Apple release?"],
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "query": "What did Apple release?",
                }
            ]
        },
    }

    def is_valid(self) -> bool:
        """Check that the query is present and not blank."""
        return bool(self.query and self.query.strip())
