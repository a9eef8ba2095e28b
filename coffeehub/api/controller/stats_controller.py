"""Statistics and health endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from coffeehub.api.controller.dependencies import get_stats_service
from coffeehub.api.schemas import HealthResponse, StatsResponse
from coffeehub.services import StatsService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(service: StatsService = Depends(get_stats_service)) -> dict:
    """Count, average price and most frequent origin, recomputed on each call."""
    stats = await service.compute_stats()
    return stats.to_dict()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
