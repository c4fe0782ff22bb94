"""Definition of FastAPI based web service."""

import os
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

import constants
import metrics
import version
from app import routers
from app.state import AppServices
from configuration import configuration
from log import get_logger

logger = get_logger(__name__)

logger.info("Initializing app")

# each uvicorn worker imports this module in its own process
if not configuration.is_loaded():
    configuration.load_configuration(
        os.environ.get(constants.CONFIG_PATH_ENV_VARIABLE, "rag-chat.yaml")
    )

service_name = configuration.configuration.name


# running on FastAPI startup
@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: builds the cache, history, embedding, vector
    index and generator services, connects them before serving requests and
    closes them on shutdown.
    """
    services = AppServices.from_configuration(configuration.configuration)
    await services.start()
    app_.state.services = services
    logger.info("App startup complete")

    yield

    logger.info("Shutting down services")
    await services.close()


app = FastAPI(
    title=f"{service_name} service - OpenAPI",
    summary=f"{service_name} service API specification.",
    description=(
        f"{service_name} answers questions about news articles using "
        "retrieval-augmented generation."
    ),
    version=version.__version__,
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
    servers=[
        {"url": "http://localhost:3001/", "description": "Locally running service"}
    ],
    lifespan=lifespan,
)

cors = configuration.service_configuration.cors

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allow_origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


def route_template(request: Request) -> Optional[str]:
    """Return path template of the app route that handled the request.

    The router stores the matched route in the request scope, so this is only
    known after the request was dispatched.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None)


@app.middleware("http")
async def rest_api_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Middleware with REST API counter update logic."""
    logger.debug("Received request for path: %s", request.url.path)

    # measure time to handle duration
    start = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start

    # session endpoints carry the session id in the path, so metrics are
    # labelled with the route template
    path = route_template(request)

    # ignore paths that are not part of the app routes
    if path is None:
        return response

    metrics.response_duration_seconds.labels(path).observe(duration)

    # ignore /metrics endpoint that will be called periodically
    if not path.endswith("/metrics"):
        # just update metrics
        metrics.rest_api_calls_total.labels(path, response.status_code).inc()
    return response


logger.info("Including routers")
routers.include_routers(app)
