"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from morocco_payroll.api.dependencies import AppSettings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    engine_version: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(settings: AppSettings) -> HealthResponse:
    """Check API health."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        engine_version=settings.engine_version,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
