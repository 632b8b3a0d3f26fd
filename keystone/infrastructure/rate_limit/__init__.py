"""Login rate limiting."""

from keystone.infrastructure.rate_limit.login_attempt_limiter import LoginAttemptLimiter
from keystone.infrastructure.rate_limit.memory_storage import InMemoryAttemptStorage
from keystone.infrastructure.rate_limit.redis_storage import RedisAttemptStorage

__all__ = [
    "InMemoryAttemptStorage",
    "LoginAttemptLimiter",
    "RedisAttemptStorage",
]
