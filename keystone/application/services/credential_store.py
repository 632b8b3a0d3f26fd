"""Credential store service.

Owns user records and their credentials: account creation, lookups,
failed-password bookkeeping (the durable lock) and password replacement
with history.

The durable lock on the user record is the cross-instance source of
truth for lockout; the rate limiter is only a fast front gate.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from keystone.application.dtos import UserView
from keystone.application.services.audit_log import AuditLog
from keystone.application.services.password_policy import PasswordPolicy
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import PasswordHistoryEntry, User
from keystone.domain.enums import (
    AccountStatus,
    ActivityAction,
    SecurityEventType,
    SecuritySeverity,
    UserRole,
)
from keystone.domain.errors import IdentityError, InvalidStatusTransition
from keystone.domain.protocols import (
    LoggerProtocol,
    PasswordHistoryRepository,
    UserRepository,
)
from keystone.domain.value_objects import Email


@dataclass(frozen=True, kw_only=True)
class NewUserData:
    """Input for account creation.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        email: Email address (any case).
        password: Plaintext password (checked against the strength rules).
        role: Role for admin-created accounts.
        status: Initial status for admin-created accounts.
    """

    first_name: str
    last_name: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    status: AccountStatus = AccountStatus.ACTIVE


class CredentialStore:
    """User and credential persistence with lockout bookkeeping.

    Dependencies (injected via constructor):
        - UserRepository: User persistence
        - PasswordHistoryRepository: Previous password hashes
        - PasswordPolicy: Strength, hashing and reuse checks
        - AuditLog: Activity and security event trail
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_history_repo: PasswordHistoryRepository,
        password_policy: PasswordPolicy,
        audit_log: AuditLog,
        logger: LoggerProtocol,
        max_login_attempts: int = 5,
        lockout_minutes: int = 15,
    ) -> None:
        self._user_repo = user_repo
        self._password_history_repo = password_history_repo
        self._password_policy = password_policy
        self._audit_log = audit_log
        self._logger = logger
        self._max_login_attempts = max_login_attempts
        self._lockout_minutes = lockout_minutes

    async def create_user(
        self,
        data: NewUserData,
        *,
        created_by: UUID | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[UserView, IdentityError]:
        """Create an account on behalf of an administrator.

        Args:
            data: Names, email, password, role and initial status.
            created_by: Admin performing the creation.
            ip_address: Admin's client IP (audit).
            user_agent: Admin's user agent (audit).

        Returns:
            Success(UserView) with no credential material.
            Failure(IdentityError) with MISSING_REQUIRED_FIELDS,
            INVALID_EMAIL, WEAK_PASSWORD or EMAIL_ALREADY_EXISTS.
        """
        result = await self._insert_user(data, created_by=created_by)
        if isinstance(result, Failure):
            return result

        user = result.value
        await self._audit_log.log_activity(
            user_id=created_by,
            action=ActivityAction.USER_CREATED,
            resource_type="user",
            resource_id=str(user.id),
            details={
                "email": user.email,
                "role": user.role.value,
                "status": user.status.value,
            },
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return Success(value=UserView.from_user(user))

    async def register_user(
        self,
        data: NewUserData,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[UserView, IdentityError]:
        """Public sign-up.

        Role and status in ``data`` are ignored: self-registered accounts are
        always USER and PENDING until an administrator approves them.
        """
        forced = NewUserData(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password=data.password,
            role=UserRole.USER,
            status=AccountStatus.PENDING,
        )
        result = await self._insert_user(forced, created_by=None)
        if isinstance(result, Failure):
            return result

        user = result.value
        await self._audit_log.log_activity(
            user_id=user.id,
            action=ActivityAction.USER_REGISTERED,
            resource_type="user",
            resource_id=str(user.id),
            details={"email": user.email},
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return Success(value=UserView.from_user(user))

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._user_repo.find_by_email(email.strip().lower())

    async def get_user_by_id(self, user_id: UUID) -> User | None:
        return await self._user_repo.find_by_id(user_id)

    async def save_status_change(self, user: User, previous: AccountStatus) -> bool:
        """Persist a transition made on ``user`` from ``previous``.

        Returns:
            False if the stored status moved on since ``user`` was loaded.
        """
        return await self._user_repo.update_status(user, expected=previous)

    async def delete_user(self, user_id: UUID) -> bool:
        """Irreversibly delete an account. Returns False if it did not exist."""
        return await self._user_repo.delete(user_id)

    async def record_failed_password_attempt(
        self,
        user: User,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> bool:
        """Count a wrong password against the account.

        Reaching the configured maximum locks the account for the lockout
        window and records a high-severity security event. The increment is
        one atomic write, so failures arriving at several instances at once
        are all counted.

        Returns:
            bool: True if this attempt locked the account.
        """
        now = datetime.now(UTC)
        lock_until = now + timedelta(minutes=self._lockout_minutes)
        attempts, locked_until = await self._user_repo.increment_failed_logins(
            user.id,
            max_attempts=self._max_login_attempts,
            lock_until=lock_until,
            now=now,
        )
        user.failed_login_attempts = attempts
        user.locked_until = locked_until
        # A live lock keeps its own expiry, so only the locking call sees ours.
        locked = locked_until == lock_until

        if locked:
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.ACCOUNT_LOCKED_FAILED_ATTEMPTS,
                severity=SecuritySeverity.HIGH,
                description="Account locked after repeated failed login attempts",
                user_id=user.id,
                ip_address=ip_address,
                user_agent=user_agent,
                details={
                    "failed_attempts": str(user.failed_login_attempts),
                    "locked_until": user.locked_until.isoformat()
                    if user.locked_until
                    else "",
                },
            )
        return locked

    async def reset_failure_counters(self, user: User) -> None:
        user.reset_failed_login()
        await self._user_repo.reset_failed_logins(user.id)

    async def update_password(
        self, user: User, new_password: str, *, actor_id: UUID | None = None
    ) -> Result[None, IdentityError]:
        """Replace a user's password.

        The new password must pass the strength rules and must not match any
        of the last ``history_depth`` passwords. On success the hash and salt
        are persisted, ``password_changed_at`` is stamped and the new hash is
        appended to the history.

        Args:
            user: Account to update.
            new_password: New plaintext password.
            actor_id: Admin changing someone else's password, if any.

        Returns:
            Success(None) or Failure(WEAK_PASSWORD | PASSWORD_REUSED).
        """
        rejected = await self.check_new_password(user, new_password)
        if rejected is not None:
            return rejected

        hashed = await self._password_policy.hash_password(new_password)
        user.set_password(hashed.hash, hashed.salt)
        if actor_id is not None:
            user.updated_by = actor_id
        await self._user_repo.update_password(user)
        await self._append_history(user)

        self._logger.info("password_updated", user_id=str(user.id))
        return Success(value=None)

    async def check_new_password(
        self, user: User, new_password: str
    ) -> Failure[IdentityError] | None:
        """Apply the strength and history rules without changing anything.

        Returns:
            None if acceptable, else Failure(WEAK_PASSWORD | PASSWORD_REUSED).
        """
        weak = self._check_strength(new_password)
        if weak is not None:
            return weak

        history = await self._password_history_repo.list_recent(
            user.id, self._password_policy.history_depth
        )
        if await self._password_policy.is_reused(new_password, history):
            return Failure(error=IdentityError.of(ErrorCode.PASSWORD_REUSED))
        return None

    async def _insert_user(
        self, data: NewUserData, *, created_by: UUID | None
    ) -> Result[User, IdentityError]:
        if not all(
            value and value.strip()
            for value in (data.first_name, data.last_name, data.email, data.password)
        ):
            return Failure(error=IdentityError.of(ErrorCode.MISSING_REQUIRED_FIELDS))

        try:
            email = Email(data.email).value
        except ValueError:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_EMAIL))

        weak = self._check_strength(data.password)
        if weak is not None:
            return weak

        if await self._user_repo.exists_by_email(email):
            return Failure(error=IdentityError.of(ErrorCode.EMAIL_ALREADY_EXISTS))

        hashed = await self._password_policy.hash_password(data.password)
        user = User(
            id=uuid7(),
            email=email,
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            password_hash=hashed.hash,
            password_salt=hashed.salt,
            role=data.role,
            created_by=created_by,
        )
        user.password_changed_at = user.created_at
        if data.status is not AccountStatus.PENDING:
            try:
                user.transition_to(data.status, actor_id=created_by)
            except InvalidStatusTransition:
                return Failure(
                    error=IdentityError.of(ErrorCode.INVALID_STATUS_TRANSITION)
                )

        await self._user_repo.save(user)
        await self._append_history(user)

        self._logger.info(
            "user_created",
            user_id=str(user.id),
            role=user.role.value,
            status=user.status.value,
        )
        return Success(value=user)

    def _check_strength(self, password: str) -> Failure[IdentityError] | None:
        report = self._password_policy.validate_strength(password)
        if report.is_valid:
            return None
        return Failure(
            error=IdentityError.of(
                ErrorCode.WEAK_PASSWORD, details={"errors": "; ".join(report.errors)}
            )
        )

    async def _append_history(self, user: User) -> None:
        await self._password_history_repo.add(
            PasswordHistoryEntry(
                id=uuid7(),
                user_id=user.id,
                password_hash=user.password_hash,
                password_salt=user.password_salt,
            )
        )
