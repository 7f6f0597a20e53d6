"""Unit tests for HealthService."""

import pytest

from notevault.core.redis_client import RedisClient
from notevault.core.services.health_service import HealthService


class BrokenSession:
    async def execute(self, stmt):
        raise ConnectionRefusedError("db down")


class PingingRedis:
    async def ping(self):
        return True


@pytest.mark.asyncio
async def test_degraded_without_redis(test_session):
    service = HealthService(test_session, redis_client=RedisClient())
    status = await service.get_health_status()

    assert status.status == "degraded"
    assert status.checks["database"]["connected"] is True
    assert status.checks["redis"]["status"] == "unavailable"


@pytest.mark.asyncio
async def test_healthy_with_redis(test_session):
    redis_client = RedisClient()
    redis_client.redis = PingingRedis()
    status = await HealthService(test_session, redis_client=redis_client).get_health_status()
    assert status.status == "healthy"


@pytest.mark.asyncio
async def test_unhealthy_when_database_fails():
    service = HealthService(BrokenSession(), redis_client=RedisClient())
    db = await service.check_database_health()
    assert db["connected"] is False
    assert db["error"] == "ConnectionRefusedError"
    assert (await service.get_health_status()).status == "unhealthy"
