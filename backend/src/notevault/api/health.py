"""Health check API endpoints (public, no session required)."""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..database import get_db_session

router = APIRouter(prefix="/health", tags=["health"])


def get_health_service(session: AsyncSession = Depends(get_db_session)) -> HealthService:
    return HealthService(session)


@router.get("/", response_model=HealthCheckResponse)
async def overall(service: HealthService = Depends(get_health_service)):
    """Combined status: healthy, degraded (no Redis) or unhealthy (no database)."""
    return await service.get_health_status()


@router.get("/database", response_model=Dict[str, Any])
async def database(service: HealthService = Depends(get_health_service)):
    return await service.check_database_health()


@router.get("/redis", response_model=Dict[str, Any])
async def redis(service: HealthService = Depends(get_health_service)):
    return await service.check_redis_health()
