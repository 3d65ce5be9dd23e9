"""
Service health and Prometheus routes.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from workqueue import __version__
from workqueue.db import get_async_session
from workqueue.observability.metrics import get_metrics
from workqueue.types.api import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


async def _storage_reachable(session: AsyncSession) -> bool:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Queue storage check failed", exc_info=True)
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service version and whether the queue table's database answers.",
)
async def health_check(
    session: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Report service health.

    The service stays up when storage is unreachable, so this answers
    200 with a degraded status rather than failing.
    """
    reachable = await _storage_reachable(session)

    return HealthResponse(
        status="healthy" if reachable else "degraded",
        version=__version__,
        database="healthy" if reachable else "unhealthy",
        storage=session.bind.dialect.name,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="503 until the queue storage answers.",
)
async def readiness_check(
    session: AsyncSession = Depends(get_async_session),
) -> JSONResponse:
    ready = await _storage_reachable(session)
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"ready": ready},
    )


@router.get("/live", summary="Liveness check")
async def liveness_check() -> dict:
    return {"alive": True}


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Queue activity counters and request latency in Prometheus text format.",
)
async def metrics() -> Response:
    collector = get_metrics()
    return Response(
        content=collector.get_metrics(),
        media_type=collector.get_content_type(),
    )
