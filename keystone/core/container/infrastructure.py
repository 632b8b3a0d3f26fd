"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Database (PostgreSQL via SQLAlchemy async)
- Password hashing (bcrypt)
- Token generation (JWT) and opaque tokens
- Rate limiting (in-process or Redis-backed attempt counters)
- Audit trail (PostgreSQL, separate sessions)
- Email (stub)
- Device enrichment (user-agents)
"""

from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING

from keystone.core.config import get_settings
from keystone.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from keystone.domain.protocols import (
        AuditProtocol,
        DeviceEnricherProtocol,
        EmailServiceProtocol,
        LoggerProtocol,
        OpaqueTokenProtocol,
        PasswordHashingProtocol,
        TokenGenerationProtocol,
    )
    from keystone.infrastructure.rate_limit import LoginAttemptLimiter


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from keystone.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development, level=settings.log_level
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Repositories open one pooled session per operation through
    ``Database.get_session()``.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor
    (BCRYPT_ROUNDS, default 12, ~250ms per hash).
    """
    from keystone.infrastructure.security.bcrypt_password_service import (
        BcryptPasswordService,
    )

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT access token service singleton (app-scoped)."""
    from keystone.infrastructure.security.jwt_service import JWTService

    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret,
        expiration_minutes=settings.jwt_expires_in,
        issuer=settings.app_name,
    )


@lru_cache()
def get_opaque_token_service() -> "OpaqueTokenProtocol":
    from keystone.infrastructure.security.opaque_token_service import (
        OpaqueTokenService,
    )

    return OpaqueTokenService()


@lru_cache()
def get_rate_limiter() -> "LoginAttemptLimiter":
    """Get the login attempt limiter singleton (app-scoped).

    Storage is chosen by configuration:
        - REDIS_URL set: RedisAttemptStorage (shared across instances)
        - otherwise: InMemoryAttemptStorage (process-local)

    The background sweep task is not started here; call ``start()`` from
    inside the running event loop (see ``start_identity``).
    """
    from keystone.infrastructure.rate_limit import (
        InMemoryAttemptStorage,
        LoginAttemptLimiter,
        RedisAttemptStorage,
    )

    settings = get_settings()
    logger = get_logger()
    lockout_window = timedelta(minutes=settings.lockout_time)

    if settings.redis_url:
        from redis.asyncio import Redis

        storage = RedisAttemptStorage(
            redis_client=Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            ),
            ttl_seconds=int(lockout_window.total_seconds()),
            logger=logger,
        )
    else:
        storage = InMemoryAttemptStorage()

    return LoginAttemptLimiter(
        storage=storage,
        max_attempts=settings.max_login_attempts,
        lockout_window=lockout_window,
        logger=logger,
        sweep_interval_seconds=settings.rate_limit_sweep_interval,
    )


@lru_cache()
def get_audit() -> "AuditProtocol":
    """Get audit trail adapter singleton (app-scoped).

    Every write opens its own session, so audit rows persist even when the
    operation being audited rolls back.
    """
    from keystone.infrastructure.audit.postgres_adapter import PostgresAuditAdapter

    return PostgresAuditAdapter(database=get_database())


@lru_cache()
def get_email_service() -> "EmailServiceProtocol":
    from keystone.infrastructure.email.stub_email_service import StubEmailService

    return StubEmailService(logger=get_logger())


@lru_cache()
def get_device_enricher() -> "DeviceEnricherProtocol":
    from keystone.infrastructure.enrichers.device_enricher import (
        UserAgentDeviceEnricher,
    )

    return UserAgentDeviceEnricher(logger=get_logger())
