"""
FastAPI application entry point.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.templating import Jinja2Templates

from workqueue import __version__
from workqueue.api.routes import board_router, health_router, records_router
from workqueue.config import get_settings
from workqueue.db import close_db, get_engine, init_db
from workqueue.exceptions import StorageUnavailableError
from workqueue.observability.logging import setup_logging
from workqueue.observability.metrics import get_metrics, setup_metrics
from workqueue.observability.tracing import instrument_fastapi, instrument_sqlalchemy, setup_tracing

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Health checks and scrapes are not counted as API traffic
UNMETERED_PATHS = frozenset({"/health", "/ready", "/live", "/metrics"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events. A database that cannot be
    reached at startup aborts the process.
    """
    # Startup
    setup_logging()
    setup_metrics()
    setup_tracing()
    try:
        await init_db()
    except StorageUnavailableError:
        logger.critical("Storage unavailable, aborting startup", exc_info=True)
        raise
    instrument_sqlalchemy(get_engine().sync_engine)

    logger.info("Application started", extra={"version": __version__})

    yield

    # Shutdown
    await close_db()
    logger.info("Application shutdown")


async def metrics_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Record request count and latency per route."""
    if request.url.path in UNMETERED_PATHS:
        return await call_next(request)

    start = time.perf_counter()
    response = await call_next(request)
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    get_metrics().record_api_request(
        method=request.method,
        endpoint=endpoint,
        status=response.status_code,
        duration_seconds=time.perf_counter() - start,
    )
    return response


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured application instance.
    """
    app = FastAPI(
        title="Work Queue Tracker",
        description="Track commission jobs from submission to delivery",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.middleware("http")(metrics_middleware)

    # Include routers
    app.include_router(health_router)
    app.include_router(records_router)
    app.include_router(board_router)

    # Instrument with OpenTelemetry
    instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()

    uvicorn.run(
        "workqueue.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


# Create app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    run()
