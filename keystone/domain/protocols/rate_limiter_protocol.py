"""Login rate limiter protocol (port).

Identifiers are ``ip:<address>`` or ``user:<id>``. The limiter is a fast
same-process (or shared-cache) gate only; the persisted lock on the user
record is the cross-instance source of truth.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(slots=True)
class AttemptRecord:
    """Failed-attempt counter for one identifier."""

    count: int
    last_attempt_at: datetime


class AttemptStorageProtocol(Protocol):
    """Backing store for attempt counters.

    Implementations:
        - InMemoryAttemptStorage (default, process-local)
        - RedisAttemptStorage (shared across instances)
    """

    async def get(self, identifier: str) -> AttemptRecord | None:
        ...

    async def increment(
        self, identifier: str, now: datetime, window_start: datetime
    ) -> int:
        """Add one failure and stamp it. Returns the new count.

        A record whose last attempt predates ``window_start`` restarts at one.
        """
        ...

    async def delete(self, identifier: str) -> None:
        ...

    async def purge_older_than(self, cutoff: datetime) -> int:
        """Drop records whose last attempt predates ``cutoff``."""
        ...


class RateLimiterProtocol(Protocol):
    """Failed-login throttle."""

    async def is_rate_limited(
        self, identifier: str, max_attempts: int | None = None
    ) -> bool:
        """True while ``count >= max_attempts`` inside the lockout window."""
        ...

    async def record_failed_attempt(self, identifier: str) -> int:
        """Increment and timestamp. Returns the new count."""
        ...

    async def reset(self, identifier: str) -> None:
        """Forget an identifier (after a successful login)."""
        ...


def ip_identifier(ip_address: str | None) -> str:
    """Limiter key for a source address."""
    return f"ip:{ip_address or 'unknown'}"


def user_identifier(user_id: object) -> str:
    """Limiter key for an account."""
    return f"user:{user_id}"
