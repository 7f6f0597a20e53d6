"""Failed-login throttling backed by Redis counters."""

import hashlib
import logging

from ...config import Settings, get_settings
from ..exceptions import TooManyAttemptsError
from ..models.user import normalize_email
from ..redis_client import RedisClient, get_redis_client

logger = logging.getLogger(__name__)


class LoginThrottle:
    """Counts failed logins per normalized email in a fixed window.

    Counting does not depend on whether the account exists. Without a Redis
    connection every check passes.
    """

    def __init__(self, redis_client: RedisClient | None = None, settings: Settings | None = None):
        self.redis = redis_client or get_redis_client()
        self.settings = settings or get_settings()

    def _key(self, email: str) -> str:
        digest = hashlib.sha256(normalize_email(email).encode("utf-8")).hexdigest()
        return f"login_failures:{digest}"

    async def check(self, email: str) -> None:
        """Raise TooManyAttemptsError once the window's budget is spent."""
        failures = await self.redis.get_counter(self._key(email))
        if failures >= self.settings.login_max_attempts:
            logger.warning("Login throttled", extra={"failures": failures})
            raise TooManyAttemptsError()

    async def record_failure(self, email: str) -> int:
        return await self.redis.increment_counter(
            self._key(email), self.settings.login_attempt_window_seconds
        )

    async def reset(self, email: str) -> None:
        await self.redis.delete(self._key(email))
