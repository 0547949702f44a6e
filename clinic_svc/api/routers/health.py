"""
Health, readiness, and metrics endpoints for operational visibility.

This module provides:
- /: Service name, version and links
- /health: Liveness probe (is the app running?)
- /ready: Readiness probe (can the database be reached?)
- /metrics: Prometheus-compatible request metrics

No authentication; these endpoints are meant for infrastructure checks.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from core.datetime_utils import utc_timestamp
from core.dependencies import get_database
from core.exceptions import StorageError
from core.middleware import get_metrics_collector
from repositories import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health & Observability"])

SERVICE_NAME = "Clinic Service API"
SERVICE_VERSION = "1.0.0"


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    """Response model for /health endpoint."""
    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str  # "ok" or "unavailable"
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class ReadyResponse(BaseModel):
    """Response model for /ready endpoint."""
    status: str  # "ready" or "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/",
    summary="API root",
    description="Root endpoint with basic API information."
)
async def root() -> Dict[str, Any]:
    """Service name, version, and links to documentation and probes."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "message": f"{SERVICE_NAME} is running.",
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
        "metrics": "/metrics"
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Check if the application is running. Does not touch the database."
)
async def health_check() -> HealthResponse:
    """Liveness probe - always 200 while the process is up."""
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=utc_timestamp()
    )


def _check_database(db: Database) -> DependencyStatus:
    """Ping the database and time the round trip."""
    start = time.perf_counter()
    try:
        db.ping()
    except StorageError as e:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.error("Database health check failed", extra={"error": e.message, "context": e.context})
        return DependencyStatus(
            name="database",
            status="unavailable",
            latency_ms=round(latency_ms, 2),
            message="Database unavailable"
        )

    latency_ms = (time.perf_counter() - start) * 1000
    return DependencyStatus(
        name="database",
        status="ok",
        latency_ms=round(latency_ms, 2),
        message="SQLite connection healthy"
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Check if the database can be reached. Returns 503 if not."
)
async def readiness_check(response: Response, db: Database = Depends(get_database)) -> ReadyResponse:
    """
    Readiness probe - can the application handle requests?

    Returns:
    - 200 with status="ready" if the database answers
    - 503 with status="not_ready" otherwise
    """
    db_status = _check_database(db)

    if db_status.status == "ok":
        status = "ready"
    else:
        status = "not_ready"
        response.status_code = 503

    return ReadyResponse(
        status=status,
        dependencies=[db_status],
        timestamp=utc_timestamp()
    )


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Export request counts and latency percentiles in Prometheus text format."
)
async def get_metrics() -> Response:
    """Export metrics in Prometheus text format."""
    return Response(
        content=get_metrics_collector().get_prometheus_format(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )
