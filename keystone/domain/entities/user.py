"""User domain entity for authentication.

Pure business logic, no framework dependencies.

Account lifecycle:
    - ``status`` follows the AccountStatus transition table
    - ``is_active`` mirrors whether the status is ACTIVE
    - Locking (``locked_until``) is orthogonal to status

Login gate order:
    locked -> pending -> rejected -> suspended -> inactive -> deactivated
    flag -> any other non-active status
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from keystone.core.enums import ErrorCode
from keystone.domain.enums import AccountStatus, UserRole
from keystone.domain.errors import InvalidStatusTransition

_STATUS_DENIALS: dict[AccountStatus, ErrorCode] = {
    AccountStatus.PENDING: ErrorCode.ACCOUNT_PENDING,
    AccountStatus.REJECTED: ErrorCode.ACCOUNT_REJECTED,
    AccountStatus.SUSPENDED: ErrorCode.ACCOUNT_SUSPENDED,
    AccountStatus.INACTIVE: ErrorCode.ACCOUNT_INACTIVE,
}


@dataclass(kw_only=True)
class User:
    """User domain entity with authentication business rules.

    Business Rules:
        - Login requires status ACTIVE, is_active True and no live lock
        - Account locks for a configured window after N consecutive failures
        - An expired lock starts a fresh failure count
        - A successful password check clears counter and lock

    Attributes:
        id: Unique user identifier.
        email: Lowercase email address (unique, case-insensitive).
        first_name: Given name.
        last_name: Family name.
        password_hash: Bcrypt hash (never plaintext).
        password_salt: Salt the hash was generated with.
        role: Coarse-grained role.
        status: Lifecycle status.
        is_active: True only while status is ACTIVE.
        email_verified: Set when an admin approves the account.
        failed_login_attempts: Consecutive failed password checks.
        locked_until: Lock expiry (None if never locked).
        password_changed_at: Last password change.
        last_login_at: Last successful login.
        last_login_ip: Source IP of the last successful login.
        last_activity_at: Last validated session use.
        created_by: Admin who created the account (None for self sign-up).
        updated_by: Last admin who changed the account.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    Example:
        >>> user = User(id=uuid7(), email="a@x.com", first_name="A",
        ...             last_name="B", password_hash="$2b$12$...",
        ...             password_salt="$2b$12$...")
        >>> user.login_denial()
        <ErrorCode.ACCOUNT_PENDING: 'ACCOUNT_PENDING'>
        >>> user.transition_to(AccountStatus.ACTIVE)
        >>> user.can_login()
        True
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    password_hash: str
    password_salt: str
    role: UserRole = UserRole.USER
    status: AccountStatus = AccountStatus.PENDING
    is_active: bool = False
    email_verified: bool = False
    failed_login_attempts: int = 0
    locked_until: datetime | None = None
    password_changed_at: datetime | None = None
    last_login_at: datetime | None = None
    last_login_ip: str | None = None
    last_activity_at: datetime | None = None
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_locked(self) -> bool:
        """Check if account is currently locked due to failed login attempts.

        Returns:
            bool: True if locked_until is in the future.
        """
        if self.locked_until is None:
            return False
        return datetime.now(UTC) < self.locked_until

    def login_denial(self) -> ErrorCode | None:
        """Return why this account may not log in, or None if it may.

        The lock is checked first: it denies login regardless of status.

        Returns:
            ErrorCode for the first failing gate, None when login is allowed.
        """
        if self.is_locked():
            return ErrorCode.ACCOUNT_LOCKED
        if self.status in _STATUS_DENIALS:
            return _STATUS_DENIALS[self.status]
        if not self.is_active:
            return ErrorCode.ACCOUNT_INACTIVE
        if not self.status.allows_login:
            return ErrorCode.ACCOUNT_NOT_ACTIVE
        return None

    def can_login(self) -> bool:
        """Status ACTIVE, is_active True and not locked."""
        return self.login_denial() is None

    def reset_failed_login(self) -> None:
        """Reset failed login counter and clear the lock."""
        self.failed_login_attempts = 0
        self.locked_until = None
        self.updated_at = datetime.now(UTC)

    def transition_to(self, target: AccountStatus, actor_id: UUID | None = None) -> None:
        """Move the account to another lifecycle status.

        Entering ACTIVE sets ``is_active`` and marks the email verified
        (approval is the verification step). Any other status clears
        ``is_active``.

        Args:
            target: Desired status.
            actor_id: Admin performing the change.

        Raises:
            InvalidStatusTransition: If the transition table forbids the move.
        """
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransition(self.status, target)

        self.status = target
        self.is_active = target is AccountStatus.ACTIVE
        if target is AccountStatus.ACTIVE:
            self.email_verified = True
        self.updated_by = actor_id
        self.updated_at = datetime.now(UTC)

    def record_login(self, ip_address: str | None, at: datetime | None = None) -> None:
        """Stamp a successful login."""
        now = at or datetime.now(UTC)
        self.last_login_at = now
        self.last_login_ip = ip_address
        self.last_activity_at = now
        self.updated_at = now

    def set_password(self, password_hash: str, password_salt: str) -> None:
        """Replace the stored credential.

        Args:
            password_hash: New bcrypt hash.
            password_salt: Salt used for the new hash.
        """
        now = datetime.now(UTC)
        self.password_hash = password_hash
        self.password_salt = password_salt
        self.password_changed_at = now
        self.updated_at = now
