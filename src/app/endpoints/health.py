"""Handler for health REST API endpoint.

The endpoint reports that the service is alive together with the state of
its backends. It never fails because of an unreachable backend.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

import constants
from app.state import AppServices, get_services
from models.responses import HealthResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["health"])


get_health_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is alive",
        "model": HealthResponse,
    },
}


@router.get("/health", responses=get_health_responses)
async def health_endpoint_handler(
    services: Annotated[AppServices, Depends(get_services)],
) -> HealthResponse:
    """
    Handle request to the /health endpoint.

    Returns:
        HealthResponse: Status of the service, whether the cache backend is
        reachable and the address of the vector index.
    """
    cache_connected = await services.store.connected()
    if not cache_connected:
        logger.warning("Cache backend is not connected")
    return HealthResponse(
        cache=(
            constants.CACHE_CONNECTED
            if cache_connected
            else constants.CACHE_NOT_CONNECTED
        ),
        vector_index=services.index.address,
    )
