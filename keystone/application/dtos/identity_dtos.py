"""Identity DTOs (Data Transfer Objects).

Result dataclasses returned by the identity command and query handlers.
None of them carries a password hash, salt or stored token hash; raw tokens
appear only in IssuedSession, which is handed out once.

DTOs:
    - UserView: Sanitized projection of a User
    - IssuedSession: Session id plus raw access/refresh tokens
    - AuthenticationSucceeded: Result of AuthenticateUser
    - SessionValidated: Result of ValidateSession
    - LogoutResult / SessionsInvalidated: Results of logout commands
    - PasswordResetRequested / PasswordChanged: Password flow results
    - SessionSummary: One active session in a listing
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from keystone.domain.entities import Session, User
from keystone.domain.enums import AccountStatus, UserRole


@dataclass(frozen=True, kw_only=True)
class UserView:
    """Sanitized user projection (no hash, no salt).

    Attributes:
        id: User identifier.
        email: Lowercase email.
        first_name: Given name.
        last_name: Family name.
        role: Coarse-grained role.
        status: Lifecycle status.
        is_active: True only while status is ACTIVE.
        email_verified: Set on approval.
        last_login_at: Last successful login.
        created_at: Creation timestamp.
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    status: AccountStatus
    is_active: bool
    email_verified: bool
    last_login_at: datetime | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            status=user.status,
            is_active=user.is_active,
            email_verified=user.email_verified,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


@dataclass(frozen=True, kw_only=True)
class IssuedSession:
    """Freshly issued session credentials.

    The raw tokens are not recoverable later: only their hashes are stored.

    Attributes:
        session_id: Session identifier (also the JWT ``sid`` claim).
        access_token: Signed HS256 JWT.
        refresh_token: Opaque refresh token.
        expires_at: Server-side session expiry.
        token_type: Always "bearer".
    """

    session_id: UUID
    access_token: str
    refresh_token: str
    expires_at: datetime
    token_type: str = "bearer"


@dataclass(frozen=True, kw_only=True)
class AuthenticationSucceeded:
    user: UserView
    session: IssuedSession


@dataclass(frozen=True, kw_only=True)
class SessionValidated:
    user: UserView
    session_id: UUID


@dataclass(frozen=True, kw_only=True)
class LogoutResult:
    """Result of a single-session logout.

    ``success`` is False when the session was already gone or belongs to a
    different user; logout is idempotent either way.
    """

    success: bool


@dataclass(frozen=True, kw_only=True)
class SessionsInvalidated:
    count: int


@dataclass(frozen=True, kw_only=True)
class PasswordResetRequested:
    message: str


@dataclass(frozen=True, kw_only=True)
class PasswordChanged:
    """Result of a password change or reset.

    Attributes:
        user_id: Whose password changed.
        sessions_invalidated: Sessions ended by the change.
        temporary_password: Generated password when an admin reset supplied
            none. Returned once and never stored in plaintext.
    """

    user_id: UUID
    sessions_invalidated: int
    temporary_password: str | None = None


@dataclass(frozen=True, kw_only=True)
class SessionSummary:
    """Active session as shown to its owner."""

    id: UUID
    ip_address: str | None
    user_agent: str | None
    device_info: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    last_activity_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def from_session(cls, session: Session) -> "SessionSummary":
        return cls(
            id=session.id,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            device_info=dict(session.device_info),
            created_at=session.created_at,
            last_activity_at=session.last_activity_at,
            expires_at=session.expires_at,
        )
