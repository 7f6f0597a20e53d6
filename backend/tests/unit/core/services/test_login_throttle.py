"""Unit tests for LoginThrottle."""

import pytest

from notevault.core.exceptions import TooManyAttemptsError
from notevault.core.redis_client import RedisClient
from notevault.core.services.login_throttle import LoginThrottle


@pytest.fixture
def throttle(fake_redis, test_settings):
    test_settings.login_max_attempts = 3
    test_settings.login_attempt_window_seconds = 120
    return LoginThrottle(redis_client=fake_redis, settings=test_settings)


@pytest.mark.asyncio
async def test_blocks_after_budget_is_spent(throttle):
    for _ in range(2):
        await throttle.record_failure("ada@example.com")
    await throttle.check("ada@example.com")

    await throttle.record_failure("ada@example.com")
    with pytest.raises(TooManyAttemptsError):
        await throttle.check("ada@example.com")

    # other accounts are unaffected
    await throttle.check("bob@example.com")


@pytest.mark.asyncio
async def test_counts_by_normalized_email(throttle):
    await throttle.record_failure("Ada@Example.com")
    await throttle.record_failure(" ada@example.com")
    await throttle.record_failure("ADA@EXAMPLE.COM")
    with pytest.raises(TooManyAttemptsError):
        await throttle.check("ada@example.com")


@pytest.mark.asyncio
async def test_reset_clears_failures(throttle):
    for _ in range(3):
        await throttle.record_failure("ada@example.com")
    await throttle.reset("ada@example.com")
    await throttle.check("ada@example.com")


@pytest.mark.asyncio
async def test_keys_do_not_contain_the_email(throttle, fake_redis):
    await throttle.record_failure("ada@example.com")
    (key,) = fake_redis.counters
    assert "ada" not in key
    assert key.startswith("login_failures:")
    assert fake_redis.expiries[key] == 120


@pytest.mark.asyncio
async def test_without_redis_every_check_passes(test_settings):
    test_settings.login_max_attempts = 1
    throttle = LoginThrottle(redis_client=RedisClient(), settings=test_settings)
    for _ in range(5):
        await throttle.record_failure("ada@example.com")
    await throttle.check("ada@example.com")
