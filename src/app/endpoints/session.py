"""Handlers for REST API calls to inspect and clear chat sessions."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from app.state import AppServices, get_services
from models.responses import SessionClearResponse, SessionHistoryResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["session"])


session_history_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Stored history, empty for unknown sessions",
        "model": SessionHistoryResponse,
    },
}

session_clear_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "History removed",
        "model": SessionClearResponse,
    },
}


@router.get(
    "/session/{session_id}/history",
    responses=session_history_responses,
)
async def session_history_endpoint_handler(
    session_id: str,
    services: Annotated[AppServices, Depends(get_services)],
) -> SessionHistoryResponse:
    """Return history of the session, oldest message first."""
    history = await services.controller.history(session_id)
    return SessionHistoryResponse(session_id=session_id, history=history)


@router.post(
    "/session/{session_id}/clear",
    responses=session_clear_responses,
)
async def session_clear_endpoint_handler(
    session_id: str,
    services: Annotated[AppServices, Depends(get_services)],
) -> SessionClearResponse:
    """Remove history of the session. Clearing an unknown session succeeds."""
    logger.info("Clearing session %s", session_id)
    await services.controller.clear(session_id)
    return SessionClearResponse(session_id=session_id)
