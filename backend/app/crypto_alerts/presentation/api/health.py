"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.presentation.api.dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    source: str
    catalog_entries: int
    next_catalog_refresh: Optional[datetime]
    alerts: int
    subscriptions: int
    evaluation_running: bool


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check application health status.

    Returns:
        Health status with timestamp and version.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
) -> ReadinessResponse:
    """Check if the engine is serving.

    Ready once the catalog has been loaded at least once.
    """
    catalog_entries = len(container.catalog)
    return ReadinessResponse(
        status="ready" if catalog_entries else "starting",
        source=container.source.name,
        catalog_entries=catalog_entries,
        next_catalog_refresh=container.catalog.next_refresh_at,
        alerts=await container.alert_repository.count(),
        subscriptions=len(container.subscriptions),
        evaluation_running=container.evaluation_loop.is_running,
    )
