"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from dexfacts import __version__
from dexfacts.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its upstream sources.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    client = getattr(request.app.state, "client", None)
    if client is None:
        return HealthResponse(
            status="unhealthy",
            version=__version__,
            services={"tokens": "unknown", "ledger": "unknown"},
        )

    # Token table
    services["tokens"] = "up" if client.registry.generation > 0 else "down"
    if services["tokens"] == "down":
        overall_status = "degraded"

    # Ledger
    try:
        await client.epoch_info()
        services["ledger"] = "up"
    except Exception:
        services["ledger"] = "down"
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the token table has been loaded.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    client = getattr(request.app.state, "client", None)
    ready = client is not None and client.registry.generation > 0

    return {"ready": ready}
