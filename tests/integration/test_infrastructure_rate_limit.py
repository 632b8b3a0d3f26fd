"""Integration tests for the login attempt limiter and its storages.

Tests cover:
- Threshold and per-call override
- Window expiry and counter restart
- Reset after success
- Sweep of stale counters and the background task lifecycle
- Redis storage fail-open behaviour
- Redis storage against a real server (skipped unless REDIS_URL is set)
"""

import asyncio
import os
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from keystone.infrastructure.rate_limit import (
    InMemoryAttemptStorage,
    LoginAttemptLimiter,
    RedisAttemptStorage,
)
from tests.utils.fakes import RecordingLogger


def make_limiter(storage=None, *, window=timedelta(minutes=15), sweep=3600):
    return LoginAttemptLimiter(
        storage=storage or InMemoryAttemptStorage(),
        max_attempts=5,
        lockout_window=window,
        logger=RecordingLogger(),
        sweep_interval_seconds=sweep,
    )


@pytest.mark.integration
class TestLoginAttemptLimiter:
    """Integration tests for LoginAttemptLimiter with in-memory storage."""

    async def test_limited_after_threshold(self):
        """Test the identifier is limited once failures reach max_attempts."""
        limiter = make_limiter()

        for expected in range(1, 5):
            assert await limiter.record_failed_attempt("user:1") == expected
            assert await limiter.is_rate_limited("user:1") is False
        await limiter.record_failed_attempt("user:1")

        assert await limiter.is_rate_limited("user:1") is True
        assert await limiter.is_rate_limited("user:2") is False

    async def test_threshold_override(self):
        """Test a per-call max_attempts replaces the default."""
        limiter = make_limiter()
        for _ in range(5):
            await limiter.record_failed_attempt("ip:10.0.0.1")

        assert await limiter.is_rate_limited("ip:10.0.0.1", max_attempts=20) is False
        assert await limiter.is_rate_limited("ip:10.0.0.1", max_attempts=5) is True

    async def test_window_elapsed_unlocks_and_restarts_count(self):
        """Test failures older than the window no longer count."""
        limiter = make_limiter(window=timedelta(milliseconds=50))
        for _ in range(5):
            await limiter.record_failed_attempt("user:1")
        assert await limiter.is_rate_limited("user:1") is True

        await asyncio.sleep(0.06)

        assert await limiter.is_rate_limited("user:1") is False
        assert await limiter.record_failed_attempt("user:1") == 1

    async def test_reset_clears_counter(self):
        """Test a successful login wipes the identifier."""
        limiter = make_limiter()
        for _ in range(5):
            await limiter.record_failed_attempt("user:1")

        await limiter.reset("user:1")

        assert await limiter.is_rate_limited("user:1") is False
        assert await limiter.record_failed_attempt("user:1") == 1

    async def test_sweep_removes_only_stale_counters(self):
        """Test sweep() evicts identifiers outside the window."""
        storage = InMemoryAttemptStorage()
        limiter = make_limiter(storage, window=timedelta(minutes=15))
        await storage.increment(
            "ip:old",
            datetime.now(UTC) - timedelta(hours=1),
            datetime.now(UTC) - timedelta(hours=2),
        )
        await limiter.record_failed_attempt("ip:fresh")

        removed = await limiter.sweep()

        assert removed == 1
        assert len(storage) == 1
        assert await storage.get("ip:old") is None

    async def test_background_sweep_runs_and_stops(self):
        """Test start() sweeps periodically and aclose() cancels the task."""
        storage = InMemoryAttemptStorage()
        limiter = make_limiter(storage, window=timedelta(milliseconds=10), sweep=0.02)
        await limiter.record_failed_attempt("ip:1")

        async with limiter:
            limiter.start()  # second start is a no-op
            await asyncio.sleep(0.1)
            assert len(storage) == 0

        assert limiter._sweep_task is None

    async def test_concurrent_failures_are_all_counted(self):
        """Test concurrent increments never lose an update."""
        limiter = make_limiter()

        counts = await asyncio.gather(
            *(limiter.record_failed_attempt("ip:burst") for _ in range(50))
        )

        assert sorted(counts) == list(range(1, 51))

    def test_invalid_threshold(self):
        """Test max_attempts below 1 is refused."""
        with pytest.raises(ValueError):
            LoginAttemptLimiter(
                storage=InMemoryAttemptStorage(),
                max_attempts=0,
                lockout_window=timedelta(minutes=1),
                logger=RecordingLogger(),
            )


@pytest.mark.integration
class TestRedisAttemptStorageFailOpen:
    """Redis errors never block a login."""

    async def test_errors_report_no_record(self):
        """Test read, write and delete failures are logged and swallowed."""
        client = AsyncMock()
        client.hgetall.side_effect = RedisConnectionError("down")
        client.delete.side_effect = RedisConnectionError("down")
        client.pipeline = MagicMock(side_effect=RedisConnectionError("down"))
        logger = RecordingLogger()
        storage = RedisAttemptStorage(redis_client=client, ttl_seconds=900, logger=logger)
        now = datetime.now(UTC)

        assert await storage.get("ip:1") is None
        assert await storage.increment("ip:1", now, now - timedelta(minutes=15)) == 0
        await storage.delete("ip:1")

        warnings = logger.messages("warning")
        assert "attempt_storage_read_failed" in warnings
        assert "attempt_storage_write_failed" in warnings
        assert "attempt_storage_delete_failed" in warnings


REDIS_URL = os.environ.get("REDIS_URL", "")


@pytest_asyncio.fixture
async def redis_client():
    client = Redis.from_url(REDIS_URL, decode_responses=True)
    await client.ping()
    yield client
    keys = await client.keys("keystone:login_attempts:*")
    if keys:
        await client.delete(*keys)
    await client.aclose()


@pytest.mark.integration
@pytest.mark.skipif(not REDIS_URL.startswith("redis"), reason="REDIS_URL not set")
class TestRedisAttemptStorageIntegration:
    """RedisAttemptStorage against a real Redis server."""

    async def test_limiter_over_redis(self, redis_client):
        """Test counting, limiting and reset through Redis."""
        storage = RedisAttemptStorage(
            redis_client=redis_client, ttl_seconds=900, logger=RecordingLogger()
        )
        limiter = make_limiter(storage)

        for _ in range(5):
            await limiter.record_failed_attempt("user:redis-test")
        limited = await limiter.is_rate_limited("user:redis-test")
        await limiter.reset("user:redis-test")

        assert limited is True
        assert await storage.get("user:redis-test") is None

    async def test_keys_carry_ttl(self, redis_client):
        """Test counters expire on their own."""
        storage = RedisAttemptStorage(
            redis_client=redis_client, ttl_seconds=900, logger=RecordingLogger()
        )
        now = datetime.now(UTC)

        await storage.increment("ip:ttl-test", now, now - timedelta(minutes=15))

        ttl = await redis_client.ttl("keystone:login_attempts:ip:ttl-test")
        assert 0 < ttl <= 900
