"""REST API routers."""

from fastapi import FastAPI

from app.endpoints import (
    chat,
    health,
    metrics,
    query,
    root,
    session,
)


def include_routers(app: FastAPI) -> None:
    """Include FastAPI routers for different endpoints.

    Args:
        app: The `FastAPI` app instance.
    """
    app.include_router(root.router)
    app.include_router(chat.router)
    app.include_router(session.router)
    app.include_router(query.router)
    app.include_router(health.router)
    app.include_router(metrics.router)
