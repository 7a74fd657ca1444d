"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from mcprovider.core.metrics import metrics

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str = "0.1.0"


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    timestamp: str
    provider_configured: bool
    version: str = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Returns 200 if the service is running."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the provider holds a Monte Carlo client. No API call is made.
    """
    provider = getattr(request.app.state, "provider", None)
    configured = provider is not None and provider.client is not None
    return ReadinessResponse(
        status="ready" if configured else "not_configured",
        timestamp=datetime.now(timezone.utc).isoformat(),
        provider_configured=configured,
    )


@router.get("/metrics")
async def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    metrics_data = metrics.get_metrics()
    return Response(
        content=metrics_data,
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
