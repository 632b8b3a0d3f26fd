"""Authentication and session commands (CQRS write operations).

Commands represent caller intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Log in with email and password.

    Attributes:
        email: Email address (any case).
        password: Plaintext password.
        ip_address: Client IP (rate limiting, audit).
        user_agent: Raw user agent string.
        device_info: Pre-parsed device details. Parsed from ``user_agent``
            when omitted.

    Example:
        >>> command = AuthenticateUser(
        ...     email="user@example.com",
        ...     password="SecurePass123!",
        ...     ip_address="203.0.113.7",
        ... )
        >>> result = await handler.handle(command)
        >>> # Returns Success(AuthenticationSucceeded) or Failure(IdentityError)
    """

    email: str
    password: str
    ip_address: str | None = None
    user_agent: str | None = None
    device_info: dict[str, Any] | None = None


@dataclass(frozen=True, kw_only=True)
class ValidateSession:
    """Check a presented access token against its session.

    Attributes:
        session_id: Session the caller claims.
        token: Raw access token.
        ip_address: Client IP.
        user_agent: Raw user agent string.
    """

    session_id: UUID
    token: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Rotate a session's tokens using its refresh token."""

    session_id: UUID
    refresh_token: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End one session.

    Attributes:
        session_id: Session to end.
        user_id: Caller (must own the session).
        ip_address: Client IP.
        user_agent: Raw user agent string.
    """

    session_id: UUID
    user_id: UUID
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """End every session of a user, optionally keeping the caller's own.

    Attributes:
        user_id: Owner of the sessions.
        except_session_id: Session to keep.
        ip_address: Client IP.
        user_agent: Raw user agent string.
    """

    user_id: UUID
    except_session_id: UUID | None = None
    ip_address: str | None = None
    user_agent: str | None = None
