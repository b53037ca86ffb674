"""Health check routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app import __version__

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    settings_store: str


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is running.",
)
async def health_check() -> HealthResponse:
    """Return service health status."""
    return HealthResponse(status="healthy", version=__version__)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness check",
    description="Check if the settings store is available.",
)
async def readiness_check(request: Request) -> ReadyResponse:
    """Return service readiness status."""
    if getattr(request.app.state, "store", None) is None:
        return ReadyResponse(status="starting", settings_store="unavailable")
    return ReadyResponse(status="ready", settings_store="available")


@router.get(
    "/live",
    summary="Liveness check",
    description="Kubernetes liveness check endpoint.",
)
async def liveness_check() -> dict:
    """Return liveness status."""
    return {"status": "alive"}
