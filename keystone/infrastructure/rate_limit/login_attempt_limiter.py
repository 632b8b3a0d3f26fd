"""Failed-login rate limiter.

Counts failed attempts per identifier (``ip:<addr>``, ``user:<id>``) inside
a lockout window. Once an identifier reaches its threshold it stays
limited until the window since its last failure elapses. A successful
login resets the identifier.

The limiter owns a background sweep task that evicts stale counters so
memory stays bounded. Construct it explicitly, ``start()`` it with the
application and ``aclose()`` it on shutdown (or use it as an async
context manager).

Usage:
    limiter = LoginAttemptLimiter(
        storage=InMemoryAttemptStorage(),
        max_attempts=5,
        lockout_window=timedelta(minutes=15),
        logger=logger,
    )
    async with limiter:
        if await limiter.is_rate_limited("ip:1.2.3.4", max_attempts=20):
            ...
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import UTC, datetime, timedelta
from types import TracebackType

from keystone.domain.protocols import AttemptStorageProtocol, LoggerProtocol


class LoginAttemptLimiter:
    """Failed-attempt limiter with a lockout window and periodic sweep.

    Implements RateLimiterProtocol (structural typing).

    Args:
        storage: Counter backend (in-memory or Redis).
        max_attempts: Default threshold.
        lockout_window: How long an identifier stays limited after its
            last failure.
        logger: Structured logger.
        sweep_interval_seconds: Seconds between sweeps.
    """

    def __init__(
        self,
        *,
        storage: AttemptStorageProtocol,
        max_attempts: int,
        lockout_window: timedelta,
        logger: LoggerProtocol,
        sweep_interval_seconds: float = 3600,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._storage = storage
        self._max_attempts = max_attempts
        self._window = lockout_window
        self._logger = logger
        self._sweep_interval = sweep_interval_seconds
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def is_rate_limited(
        self, identifier: str, max_attempts: int | None = None
    ) -> bool:
        """Check whether an identifier is currently throttled.

        Args:
            identifier: ``ip:<addr>`` or ``user:<id>``.
            max_attempts: Override of the default threshold.

        Returns:
            True once the count reaches the threshold and the last failure
            is still inside the window. A record outside the window counts
            as not limited.
        """
        record = await self._storage.get(identifier)
        if record is None:
            return False
        if datetime.now(UTC) - record.last_attempt_at >= self._window:
            return False
        limit = max_attempts if max_attempts is not None else self._max_attempts
        return record.count >= limit

    async def record_failed_attempt(self, identifier: str) -> int:
        """Count a failure. Returns the count inside the current window."""
        now = datetime.now(UTC)
        return await self._storage.increment(identifier, now, now - self._window)

    async def reset(self, identifier: str) -> None:
        await self._storage.delete(identifier)

    async def sweep(self) -> int:
        """Evict counters whose last failure predates the window.

        Returns:
            Number of identifiers removed.
        """
        removed = await self._storage.purge_older_than(datetime.now(UTC) - self._window)
        if removed:
            self._logger.debug("login_attempts_swept", removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Background sweep lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the periodic sweep. Calling twice is a no-op."""
        if self._sweep_task is not None and not self._sweep_task.done():
            return
        self._sweep_task = asyncio.create_task(
            self._sweep_forever(), name="login-attempt-sweep"
        )

    async def aclose(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def __aenter__(self) -> LoginAttemptLimiter:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                await self.sweep()
            except Exception as e:  # noqa: BLE001 - sweep must outlive a bad iteration
                self._logger.error("login_attempt_sweep_failed", error=e)
