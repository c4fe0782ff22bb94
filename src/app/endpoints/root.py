"""Handler for the / endpoint."""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["root"])


@router.get("/", response_class=PlainTextResponse)
def root_endpoint_handler() -> PlainTextResponse:
    """Answer with a short text so load balancers can probe the service."""
    return PlainTextResponse("OK")
