"""Pytest configuration and shared fixtures.

Unit tests run the real application services against in-memory fakes of
every persistence port (tests/utils/fakes.py). Only the adapters under
keystone/infrastructure are exercised directly, in tests/integration.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from keystone.application.commands.handlers.account_status_handler import (
    AccountStatusHandler,
)
from keystone.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from keystone.application.services import (
    AuditLog,
    CredentialStore,
    NewUserData,
    PasswordPolicy,
    SessionManager,
)
from keystone.core.result import Success
from keystone.domain.entities import User
from keystone.domain.enums import AccountStatus, UserRole
from keystone.infrastructure.enrichers import UserAgentDeviceEnricher
from keystone.infrastructure.rate_limit import (
    InMemoryAttemptStorage,
    LoginAttemptLimiter,
)
from keystone.infrastructure.security import JWTService, OpaqueTokenService
from tests.utils.fakes import (
    FastHasher,
    InMemoryAudit,
    InMemoryLoginHistoryRepository,
    InMemoryPasswordHistoryRepository,
    InMemoryPasswordResetTokenRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
    RecordingEmailService,
    RecordingLogger,
)

TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-chars"
STRONG_PASSWORD = "SecurePass123!"
CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real adapters"
    )


def create_user(
    *,
    user_id: UUID | None = None,
    email: str = "test@example.com",
    status: AccountStatus = AccountStatus.ACTIVE,
    role: UserRole = UserRole.USER,
    failed_login_attempts: int = 0,
    locked_until: datetime | None = None,
) -> User:
    """Helper to create User entities for testing.

    ``is_active`` follows ``status`` the way a status transition sets it.
    """
    now = datetime.now(UTC)
    return User(
        id=user_id or uuid7(),
        email=email,
        first_name="Test",
        last_name="User",
        password_hash="salt$hash",
        password_salt="salt",
        role=role,
        status=status,
        is_active=status is AccountStatus.ACTIVE,
        failed_login_attempts=failed_login_attempts,
        locked_until=locked_until,
        created_at=now,
        updated_at=now,
    )


@dataclass
class IdentityHarness:
    """Real services wired to in-memory ports."""

    logger: RecordingLogger
    hasher: FastHasher
    users: InMemoryUserRepository
    sessions: InMemorySessionRepository
    login_history: InMemoryLoginHistoryRepository
    password_history: InMemoryPasswordHistoryRepository
    reset_tokens: InMemoryPasswordResetTokenRepository
    audit: InMemoryAudit
    email: RecordingEmailService
    limiter: LoginAttemptLimiter
    token_service: JWTService
    opaque_tokens: OpaqueTokenService
    device_enricher: UserAgentDeviceEnricher
    audit_log: AuditLog
    password_policy: PasswordPolicy
    credential_store: CredentialStore
    session_manager: SessionManager

    def authenticate_handler(self) -> AuthenticateUserHandler:
        return AuthenticateUserHandler(
            credential_store=self.credential_store,
            password_policy=self.password_policy,
            session_manager=self.session_manager,
            rate_limiter=self.limiter,
            login_history_repo=self.login_history,
            device_enricher=self.device_enricher,
            audit_log=self.audit_log,
            logger=self.logger,
            ip_max_login_attempts=20,
        )

    def account_status_handler(self) -> AccountStatusHandler:
        return AccountStatusHandler(
            credential_store=self.credential_store,
            session_manager=self.session_manager,
            audit_log=self.audit_log,
            logger=self.logger,
        )

    async def add_user(
        self,
        email: str = "user@example.com",
        password: str = STRONG_PASSWORD,
        *,
        role: UserRole = UserRole.USER,
        status: AccountStatus = AccountStatus.ACTIVE,
    ) -> User:
        """Create an account through the credential store and return its stored row.

        Statuses unreachable at creation (suspended) are reached through a
        legal transition afterwards. Changes made to the returned entity are
        what later reads see.
        """
        initial = (
            AccountStatus.ACTIVE
            if status in (AccountStatus.ACTIVE, AccountStatus.SUSPENDED)
            else AccountStatus.PENDING
        )
        result = await self.credential_store.create_user(
            NewUserData(
                first_name="Test",
                last_name="User",
                email=email,
                password=password,
                role=role,
                status=initial,
            )
        )
        assert isinstance(result, Success), result
        user = self.users.users[result.value.id]
        if user.status is not status:
            user.transition_to(status)
        return user


@pytest.fixture
def identity() -> IdentityHarness:
    """Fresh service graph per test."""
    logger = RecordingLogger()
    hasher = FastHasher()
    users = InMemoryUserRepository()
    sessions = InMemorySessionRepository()
    login_history = InMemoryLoginHistoryRepository()
    password_history = InMemoryPasswordHistoryRepository()
    audit = InMemoryAudit()
    token_service = JWTService(secret_key=TEST_JWT_SECRET, expiration_minutes=60)
    opaque_tokens = OpaqueTokenService()

    audit_log = AuditLog(audit=audit, logger=logger)
    password_policy = PasswordPolicy(hasher=hasher, history_depth=5)
    credential_store = CredentialStore(
        user_repo=users,
        password_history_repo=password_history,
        password_policy=password_policy,
        audit_log=audit_log,
        logger=logger,
        max_login_attempts=5,
        lockout_minutes=15,
    )
    session_manager = SessionManager(
        session_repo=sessions,
        user_repo=users,
        login_history_repo=login_history,
        token_service=token_service,
        opaque_tokens=opaque_tokens,
        audit_log=audit_log,
        logger=logger,
        session_timeout_hours=24,
    )
    return IdentityHarness(
        logger=logger,
        hasher=hasher,
        users=users,
        sessions=sessions,
        login_history=login_history,
        password_history=password_history,
        reset_tokens=InMemoryPasswordResetTokenRepository(),
        audit=audit,
        email=RecordingEmailService(),
        limiter=LoginAttemptLimiter(
            storage=InMemoryAttemptStorage(),
            max_attempts=5,
            lockout_window=timedelta(minutes=15),
            logger=logger,
        ),
        token_service=token_service,
        opaque_tokens=opaque_tokens,
        device_enricher=UserAgentDeviceEnricher(logger=logger),
        audit_log=audit_log,
        password_policy=password_policy,
        credential_store=credential_store,
        session_manager=session_manager,
    )
