"""Health service implementation."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..redis_client import RedisClient, get_redis_client
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


async def _probe(check: Callable[[], Awaitable[Any]]) -> Dict[str, Any]:
    """Run one connectivity check and time it. Failures are reported, not raised."""
    loop = asyncio.get_running_loop()
    started = loop.time()
    try:
        await check()
    except Exception as exc:
        return {"connected": False, "status": "unhealthy", "error": type(exc).__name__, "response_time_ms": None}
    elapsed = (loop.time() - started) * 1000
    return {"connected": True, "status": "healthy", "response_time_ms": round(elapsed, 2)}


class HealthService(IHealthService):
    """Database and Redis connectivity.

    Redis only backs login throttling, so a missing Redis degrades the
    status instead of failing it.
    """

    def __init__(self, session: AsyncSession, redis_client: RedisClient | None = None):
        self.session = session
        self.redis_client = redis_client or get_redis_client()

    async def get_health_status(self) -> HealthCheckResponse:
        database = await self.check_database_health()
        redis = await self.check_redis_health()

        if not database["connected"]:
            status = "unhealthy"
        elif not redis["connected"]:
            status = "degraded"
        else:
            status = "healthy"

        return HealthCheckResponse(
            status=status,
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            checks={"database": database, "redis": redis},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        return await _probe(lambda: self.session.execute(text("SELECT 1")))

    async def check_redis_health(self) -> Dict[str, Any]:
        if not self.redis_client.connected:
            return {"connected": False, "status": "unavailable", "response_time_ms": None}
        return await _probe(self.redis_client.redis.ping)
