"""Handler for REST API call to answer a single question without a session."""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends

from app.state import AppServices, get_services
from errors import UpstreamUnavailableError
from models.requests import QueryRequest
from models.responses import ErrorResponse, RagAnswer
from utils.endpoints import bad_request, upstream_error_to_http

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["query"])


query_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Answer with the documents it is based on",
        "model": RagAnswer,
    },
    400: {
        "description": "Query is missing",
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


@router.post("/query", responses=query_responses)
async def query_endpoint_handler(
    services: Annotated[AppServices, Depends(get_services)],
    query_request: Annotated[Optional[QueryRequest], Body()] = None,
) -> RagAnswer:
    """
    Handle request to the /query endpoint.

    Answers the question from the indexed news articles. Nothing is stored
    in any session.
    """
    if query_request is None or not query_request.is_valid():
        raise bad_request("query is required")

    try:
        return await services.orchestrator.answer(query_request.query)  # type: ignore[arg-type]
    except UpstreamUnavailableError as e:
        logger.error("Unable to answer query: %s", e)
        raise upstream_error_to_http(e) from e
