"""Redis client for login throttling and health checks."""

import functools
import logging
from typing import Optional

import redis.asyncio as redis

from ..config import get_settings

logger = logging.getLogger(__name__)


def _degrades_to(fallback):
    """Return ``fallback`` while disconnected or when the Redis call fails.

    Throttling is best effort: a Redis outage must never break logins.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, key, *args):
            if self.redis is None:
                return fallback
            try:
                return await func(self, key, *args)
            except redis.RedisError as exc:
                logger.error(
                    "Redis command failed",
                    extra={"command": func.__name__, "exception_type": type(exc).__name__},
                )
                return fallback

        return wrapper

    return decorator


class RedisClient:
    """Connection holder whose commands become no-ops while disconnected."""

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None

    @property
    def connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        """Open the pool and ping; leaves the client disconnected on failure."""
        client = redis.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception:
            await client.aclose()
            raise
        self.redis = client
        logger.info("Connected to Redis")

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    @_degrades_to(False)
    async def delete(self, key: str) -> bool:
        return await self.redis.delete(key) > 0

    @_degrades_to(0)
    async def increment_counter(self, key: str, expire: int) -> int:
        """Increment a fixed-window counter, the window starts on first hit."""
        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, expire)
        return int(count)

    @_degrades_to(0)
    async def get_counter(self, key: str) -> int:
        value = await self.redis.get(key)
        return int(value) if value else 0


# Shared connection pool wrapper; holds no per-user state
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Process-wide RedisClient."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
