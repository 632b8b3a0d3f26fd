"""Unit tests for PasswordPolicy, AuditLog and CredentialStore.

Tests cover:
- Strength scoring and secure password generation
- Password reuse detection bounded by history depth
- Audit writes never raising, severity mirroring, listings, resolution
- Account creation validation order and sign-up defaults
- Durable lockout bookkeeping (live lock, expired lock, stale copies)
- Password replacement with history

Architecture:
- Real services, in-memory ports (tests/utils/fakes.py)
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from keystone.application.services import NewUserData, PasswordPolicy
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Success
from keystone.domain.enums import (
    AccountStatus,
    ActivityAction,
    SecurityEventType,
    SecuritySeverity,
    UserRole,
)
from keystone.domain.validators import validate_password_strength
from tests.conftest import STRONG_PASSWORD
from tests.utils.fakes import FastHasher


def new_user_data(**overrides) -> NewUserData:
    values = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "Ada@Example.com",
        "password": STRONG_PASSWORD,
    }
    values.update(overrides)
    return NewUserData(**values)


@pytest.mark.unit
class TestPasswordPolicy:
    """Test PasswordPolicy."""

    @pytest.mark.parametrize("length", [8, 16, 64, 72])
    def test_generated_password_is_strong(self, length):
        """Test generated passwords pass every strength rule."""
        password = PasswordPolicy.generate_secure_password(length)

        assert len(password) == length
        assert validate_password_strength(password).is_valid is True

    def test_validate_strength_reports_score(self):
        """Test validate_strength() scores each passed rule."""
        policy = PasswordPolicy(hasher=FastHasher())

        strong = policy.validate_strength(STRONG_PASSWORD)
        weak = policy.validate_strength("abc")

        assert (strong.is_valid, strong.score, strong.errors) == (True, 5, ())
        assert weak.is_valid is False
        assert weak.score == 1
        assert len(weak.errors) == 4

    def test_generated_passwords_differ(self):
        """Test two generated passwords are not equal."""
        assert PasswordPolicy.generate_secure_password() != (
            PasswordPolicy.generate_secure_password()
        )

    @pytest.mark.parametrize("length", [7, 73])
    def test_generate_rejects_out_of_range_length(self, length):
        """Test lengths outside 8 to 72 raise ValueError."""
        with pytest.raises(ValueError):
            PasswordPolicy.generate_secure_password(length)

    def test_password_over_72_bytes_is_rejected(self):
        """Test a long password fails even when every character rule passes."""
        policy = PasswordPolicy(hasher=FastHasher())
        password = "Aa1!" + "x" * 69

        strength = policy.validate_strength(password)

        assert len(password.encode()) == 73
        assert strength.is_valid is False
        assert strength.score == 5
        assert strength.errors == ("Password must be at most 72 bytes long",)

    def test_multibyte_characters_count_as_bytes(self):
        """Test the 72 limit counts UTF-8 bytes, not characters."""
        password = "Aa1!" + "\u00e9" * 35

        assert len(password) == 39
        assert validate_password_strength(password).is_valid is False
        assert validate_password_strength(password[:-1]).is_valid is True

    async def test_hash_then_verify(self):
        """Test hashing and verification round through the hasher."""
        policy = PasswordPolicy(hasher=FastHasher())

        hashed = await policy.hash_password(STRONG_PASSWORD)

        assert await policy.verify_password(STRONG_PASSWORD, hashed.hash, hashed.salt)
        assert not await policy.verify_password("Other123!", hashed.hash, hashed.salt)

    async def test_is_reused_only_checks_history_depth(self, identity):
        """Test a password older than history_depth may be reused."""
        policy = PasswordPolicy(hasher=identity.hasher, history_depth=2)
        user = await identity.add_user()
        for password in ("Second123!", "Third123!"):
            await identity.credential_store.update_password(user, password)

        history = await identity.password_history.list_recent(user.id, 10)

        assert await policy.is_reused("Third123!", history) is True
        assert await policy.is_reused("Second123!", history) is True
        assert await policy.is_reused(STRONG_PASSWORD, history) is False


@pytest.mark.unit
class TestAuditLog:
    """Test AuditLog best-effort writes and queries."""

    async def test_activity_is_recorded(self, identity):
        """Test log_activity() appends an entry."""
        user_id = uuid7()

        await identity.audit_log.log_activity(
            user_id=user_id, action=ActivityAction.USER_LOGIN, ip_address="10.0.0.1"
        )

        assert len(identity.audit.activity) == 1
        entry = identity.audit.activity[0]
        assert entry.user_id == user_id
        assert entry.action is ActivityAction.USER_LOGIN
        assert entry.success is True

    async def test_failure_result_is_logged_not_raised(self, identity):
        """Test a Failure from the store becomes a warning."""
        identity.audit.fail = True

        await identity.audit_log.log_activity(
            user_id=None, action=ActivityAction.USER_LOGIN
        )

        assert "activity_log_write_failed" in identity.logger.messages("warning")

    async def test_adapter_exception_is_swallowed(self, identity):
        """Test an exception from the adapter never reaches the caller."""
        identity.audit.record_security_event = AsyncMock(side_effect=RuntimeError("db"))

        await identity.audit_log.log_security_event(
            event_type=SecurityEventType.RATE_LIMIT_EXCEEDED,
            severity=SecuritySeverity.MEDIUM,
            description="limit",
        )

        assert "security_event_write_failed" in identity.logger.messages("error")

    @pytest.mark.parametrize(
        ("severity", "level"),
        [
            (SecuritySeverity.CRITICAL, "critical"),
            (SecuritySeverity.HIGH, "error"),
            (SecuritySeverity.MEDIUM, "warning"),
            (SecuritySeverity.LOW, "info"),
        ],
    )
    async def test_security_events_mirrored_by_severity(
        self, identity, severity, level
    ):
        """Test each severity maps to its log level."""
        await identity.audit_log.log_security_event(
            event_type=SecurityEventType.NEW_IP_ADDRESS,
            severity=severity,
            description="mirrored event",
        )

        assert "mirrored event" in identity.logger.messages(level)

    async def test_list_queries_filter_and_order(self, identity):
        """Test listings filter by user and severity, newest first."""
        user_id = uuid7()
        for action in (ActivityAction.USER_LOGIN, ActivityAction.USER_LOGOUT):
            await identity.audit_log.log_activity(user_id=user_id, action=action)
        await identity.audit_log.log_activity(
            user_id=uuid7(), action=ActivityAction.USER_LOGIN
        )
        for severity in (SecuritySeverity.LOW, SecuritySeverity.HIGH):
            await identity.audit_log.log_security_event(
                event_type=SecurityEventType.NEW_IP_ADDRESS,
                severity=severity,
                description="event",
                user_id=user_id,
            )

        activity = await identity.audit_log.list_activity(user_id=user_id)
        high = await identity.audit_log.list_security_events(
            user_id=user_id, severity=SecuritySeverity.HIGH
        )

        assert isinstance(activity, Success)
        assert [e.action for e in activity.value] == [
            ActivityAction.USER_LOGOUT,
            ActivityAction.USER_LOGIN,
        ]
        assert isinstance(high, Success)
        assert [e.severity for e in high.value] == [SecuritySeverity.HIGH]

    async def test_resolve_security_event(self, identity):
        """Test resolving stamps resolver, and unknown ids return None."""
        admin_id = uuid7()
        await identity.audit_log.log_security_event(
            event_type=SecurityEventType.USER_SUSPENDED,
            severity=SecuritySeverity.MEDIUM,
            description="suspended",
        )
        event_id = identity.audit.events[0].id

        resolved = await identity.audit_log.resolve_security_event(event_id, admin_id)
        missing = await identity.audit_log.resolve_security_event(uuid7(), admin_id)

        assert isinstance(resolved, Success)
        assert resolved.value.resolved_by == admin_id
        assert identity.audit.events[0].resolved_by == admin_id
        assert missing == Success(value=None)


@pytest.mark.unit
class TestCredentialStoreCreate:
    """Test account creation through CredentialStore."""

    async def test_create_user_returns_sanitized_view(self, identity):
        """Test creation lowercases email and exposes no credential fields."""
        admin_id = uuid7()

        result = await identity.credential_store.create_user(
            new_user_data(role=UserRole.EDITOR), created_by=admin_id
        )

        assert isinstance(result, Success)
        view = result.value
        assert view.email == "ada@example.com"
        assert view.role is UserRole.EDITOR
        assert view.status is AccountStatus.ACTIVE
        assert view.is_active is True
        assert not hasattr(view, "password_hash")
        stored = identity.users.users[view.id]
        assert stored.created_by == admin_id
        assert stored.password_hash.startswith(stored.password_salt)
        assert len(identity.password_history.entries) == 1
        assert identity.audit.actions() == [ActivityAction.USER_CREATED.value]

    async def test_register_forces_user_role_and_pending(self, identity):
        """Test public sign-up ignores requested role and status."""
        result = await identity.credential_store.register_user(
            new_user_data(role=UserRole.ADMIN, status=AccountStatus.ACTIVE)
        )

        assert isinstance(result, Success)
        assert result.value.role is UserRole.USER
        assert result.value.status is AccountStatus.PENDING
        assert result.value.is_active is False
        assert identity.audit.actions() == [ActivityAction.USER_REGISTERED.value]

    @pytest.mark.parametrize(
        ("overrides", "code"),
        [
            ({"first_name": "  "}, ErrorCode.MISSING_REQUIRED_FIELDS),
            ({"password": ""}, ErrorCode.MISSING_REQUIRED_FIELDS),
            ({"email": "not-an-email"}, ErrorCode.INVALID_EMAIL),
            ({"password": "weakpass"}, ErrorCode.WEAK_PASSWORD),
        ],
    )
    async def test_create_user_validation(self, identity, overrides, code):
        """Test invalid input is rejected before anything is stored."""
        result = await identity.credential_store.create_user(new_user_data(**overrides))

        assert isinstance(result, Failure)
        assert result.error.code is code
        assert identity.users.users == {}

    async def test_weak_password_details_list_every_rule(self, identity):
        """Test WEAK_PASSWORD carries all failed rules."""
        result = await identity.credential_store.create_user(
            new_user_data(password="weakpass")
        )

        assert isinstance(result, Failure)
        assert result.error.details is not None
        assert "uppercase" in result.error.details["errors"]
        assert "number" in result.error.details["errors"]

    async def test_duplicate_email_is_case_insensitive(self, identity):
        """Test a second account with the same email in other case fails."""
        await identity.credential_store.create_user(new_user_data())

        result = await identity.credential_store.create_user(
            new_user_data(email="ADA@example.com")
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.EMAIL_ALREADY_EXISTS

    async def test_lookup_by_email_is_case_insensitive(self, identity):
        """Test get_user_by_email() matches any case."""
        user = await identity.add_user("mixed@example.com")

        found = await identity.credential_store.get_user_by_email(" MIXED@Example.com ")

        assert found is not None
        assert found.id == user.id

    async def test_lookup_by_id(self, identity):
        """Test get_user_by_id() returns the user or None."""
        user = await identity.add_user()

        assert (await identity.credential_store.get_user_by_id(user.id)).id == user.id
        assert await identity.credential_store.get_user_by_id(uuid7()) is None


@pytest.mark.unit
class TestCredentialStoreLockout:
    """Test record_failed_password_attempt()."""

    async def test_fifth_failure_locks_and_records_high_event(self, identity):
        """Test the locking attempt writes a high-severity event."""
        user = await identity.add_user()

        results = [
            await identity.credential_store.record_failed_password_attempt(user)
            for _ in range(5)
        ]

        assert results == [False, False, False, False, True]
        assert identity.users.users[user.id].is_locked() is True
        events = [
            e
            for e in identity.audit.events
            if e.event_type is SecurityEventType.ACCOUNT_LOCKED_FAILED_ATTEMPTS
        ]
        assert len(events) == 1
        assert events[0].severity is SecuritySeverity.HIGH

    async def test_reset_failure_counters(self, identity):
        """Test counters clear after a reset."""
        user = await identity.add_user()
        for _ in range(5):
            await identity.credential_store.record_failed_password_attempt(user)

        await identity.credential_store.reset_failure_counters(user)

        assert user.failed_login_attempts == 0
        assert user.locked_until is None

    async def test_failure_while_locked_keeps_expiry_and_event_count(self, identity):
        """Test a sixth failure neither extends the lock nor re-alerts."""
        user = await identity.add_user()
        for _ in range(5):
            await identity.credential_store.record_failed_password_attempt(user)
        original = user.locked_until

        locked_again = await identity.credential_store.record_failed_password_attempt(
            user
        )

        assert locked_again is False
        assert user.failed_login_attempts == 6
        assert user.locked_until == original
        assert identity.audit.event_types().count("account_locked_failed_attempts") == 1

    async def test_expired_lock_starts_fresh_count(self, identity):
        """Test the first failure after a lock expires counts from one."""
        user = await identity.add_user()
        user.failed_login_attempts = 5
        user.locked_until = datetime.now(UTC) - timedelta(seconds=1)

        locked = await identity.credential_store.record_failed_password_attempt(user)

        assert locked is False
        assert user.failed_login_attempts == 1
        assert user.locked_until is None

    async def test_failures_on_stale_copies_are_all_counted(self, identity):
        """Test two copies loaded before either failure both count."""
        user = await identity.add_user()
        first = await identity.credential_store.get_user_by_id(user.id)
        second = await identity.credential_store.get_user_by_id(user.id)

        await identity.credential_store.record_failed_password_attempt(first)
        await identity.credential_store.record_failed_password_attempt(second)

        assert second.failed_login_attempts == 2
        assert identity.users.users[user.id].failed_login_attempts == 2


@pytest.mark.unit
class TestCredentialStoreUpdatePassword:
    """Test update_password()."""

    async def test_update_password_appends_history(self, identity):
        """Test a new password is stored and added to the history."""
        user = await identity.add_user()
        old_hash = user.password_hash

        result = await identity.credential_store.update_password(user, "BrandNew456$")

        assert result == Success(value=None)
        assert user.password_hash != old_hash
        assert await identity.password_policy.verify_password(
            "BrandNew456$", user.password_hash, user.password_salt
        )
        assert len(identity.password_history.entries) == 2

    async def test_reusing_current_password_is_rejected(self, identity):
        """Test the current password counts as history."""
        user = await identity.add_user()

        result = await identity.credential_store.update_password(user, STRONG_PASSWORD)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.PASSWORD_REUSED

    async def test_sixth_oldest_password_may_be_reused(self, identity):
        """Test only the last five passwords are blocked."""
        user = await identity.add_user()
        for i in range(5):
            changed = await identity.credential_store.update_password(
                user, f"Rotation{i}Pass!"
            )
            assert isinstance(changed, Success)

        result = await identity.credential_store.update_password(user, STRONG_PASSWORD)

        assert isinstance(result, Success)

    async def test_weak_new_password_is_rejected(self, identity):
        """Test strength rules apply to password changes."""
        user = await identity.add_user()

        result = await identity.credential_store.update_password(user, "short")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.WEAK_PASSWORD
