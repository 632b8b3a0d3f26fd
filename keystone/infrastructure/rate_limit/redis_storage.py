"""Redis-backed storage for login attempt counters.

Lets horizontally scaled instances share one view of failed attempts.
Each identifier is a hash ``{count, last_attempt_at}`` whose TTL equals the
lockout window, so stale records expire on their own and the periodic
sweep has nothing to do.

Fail-open policy:
    Redis errors never block a login. Reads report "no record", increments
    report zero and the error is logged. The persisted lock on the user
    record still applies.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from redis.exceptions import RedisError

from keystone.domain.protocols import AttemptRecord, LoggerProtocol

_KEY_PREFIX = "keystone:login_attempts:"


class RedisAttemptStorage:
    """Redis attempt storage.

    Implements AttemptStorageProtocol (structural typing).

    Args:
        redis_client: An async Redis client (redis.asyncio.Redis compatible).
        ttl_seconds: Record lifetime; set to the lockout window.
        logger: Logger for fail-open diagnostics.
    """

    def __init__(
        self, *, redis_client: Any, ttl_seconds: int, logger: LoggerProtocol
    ) -> None:
        self.redis = redis_client
        self._ttl_seconds = ttl_seconds
        self._logger = logger

    def _key(self, identifier: str) -> str:
        return f"{_KEY_PREFIX}{identifier}"

    async def get(self, identifier: str) -> AttemptRecord | None:
        try:
            data = await self.redis.hgetall(self._key(identifier))
        except RedisError as e:
            self._logger.warning(
                "attempt_storage_read_failed", identifier=identifier, error_message=str(e)
            )
            return None
        if not data:
            return None
        return AttemptRecord(
            count=int(_field(data, "count")),
            last_attempt_at=datetime.fromtimestamp(
                float(_field(data, "last_attempt_at")), tz=UTC
            ),
        )

    async def increment(
        self, identifier: str, now: datetime, window_start: datetime
    ) -> int:
        key = self._key(identifier)
        try:
            record = await self.get(identifier)
            async with self.redis.pipeline(transaction=True) as pipe:
                if record is not None and record.last_attempt_at < window_start:
                    pipe.delete(key)
                pipe.hincrby(key, "count", 1)
                pipe.hset(key, "last_attempt_at", str(now.timestamp()))
                pipe.expire(key, self._ttl_seconds)
                results = await pipe.execute()
        except RedisError as e:
            self._logger.warning(
                "attempt_storage_write_failed", identifier=identifier, error_message=str(e)
            )
            return 0
        # hincrby result sits after the optional delete
        return int(results[-3])

    async def delete(self, identifier: str) -> None:
        try:
            await self.redis.delete(self._key(identifier))
        except RedisError as e:
            self._logger.warning(
                "attempt_storage_delete_failed", identifier=identifier, error_message=str(e)
            )

    async def purge_older_than(self, cutoff: datetime) -> int:
        # Keys expire via TTL.
        return 0


def _field(data: dict[Any, Any], name: str) -> Any:
    """Read a hash field whether the client decodes responses or not."""
    if name in data:
        return data[name]
    return data[name.encode()]
