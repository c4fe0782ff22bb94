"""Handler for REST API call to answer one chat turn."""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends

from app.state import AppServices, get_services
from errors import UpstreamUnavailableError
from models.requests import ChatRequest
from models.responses import ChatResponse, ErrorResponse
from utils.endpoints import bad_request, upstream_error_to_http

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["chat"])


chat_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Answer and updated session history",
        "model": ChatResponse,
    },
    400: {
        "description": "Session identifier or message is missing",
        "model": ErrorResponse,
    },
    500: {
        "description": "Vector index is misconfigured",
        "model": ErrorResponse,
    },
    503: {
        "description": "External service is not available",
        "model": ErrorResponse,
    },
}


@router.post("/chat", responses=chat_responses)
async def chat_endpoint_handler(
    services: Annotated[AppServices, Depends(get_services)],
    chat_request: Annotated[Optional[ChatRequest], Body()] = None,
) -> ChatResponse:
    """
    Handle request to the /chat endpoint.

    Loads the session history, answers the message from the indexed news
    articles and stores the extended history. When answering fails nothing
    is stored.

    Raises:
        HTTPException: 400 when sessionId or userMessage is absent or blank,
        503 when an external service is not available, 500 when the vector
        index is misconfigured.
    """
    if chat_request is None or not chat_request.is_valid():
        raise bad_request("sessionId and userMessage are required")

    # is_valid() guarantees both fields are set
    session_id: str = chat_request.session_id  # type: ignore[assignment]
    user_message: str = chat_request.user_message  # type: ignore[assignment]

    logger.info("Chat turn in session %s", session_id)
    try:
        return await services.controller.turn(session_id, user_message)
    except UpstreamUnavailableError as e:
        logger.error("Unable to answer chat message: %s", e)
        raise upstream_error_to_http(e) from e
