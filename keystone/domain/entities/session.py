"""Session domain entity.

A server-side record binding a user to a signed access token and an opaque
refresh token. Only SHA-256 hashes of the tokens are held; the raw values
are returned to the caller once at creation.

Lifecycle:
    created -> active -> (expired | invalidated)

There is no way back: an invalidated or expired session never validates
again.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Authenticated session.

    Attributes:
        id: Session identifier (also embedded in the access token).
        user_id: Owning user.
        token_hash: SHA-256 hex digest of the access token.
        refresh_token_hash: SHA-256 hex digest of the refresh token.
        ip_address: Client IP at creation.
        user_agent: Raw user agent string.
        device_info: Parsed device details (type, browser, os).
        expires_at: Server-side expiry, independent of the token ``exp``.
        last_activity_at: Last validated use.
        is_active: False once invalidated.
        invalidated_at: When the session was invalidated.
        invalidated_reason: Why (logout, password_changed, user_suspended...).
        created_at: Creation timestamp.

    Example:
        >>> session = Session(id=uuid7(), user_id=uuid7(), token_hash="...",
        ...                   refresh_token_hash="...",
        ...                   expires_at=datetime.now(UTC) + timedelta(hours=24))
        >>> session.is_valid()
        True
        >>> session.invalidate("logout")
        True
        >>> session.is_valid()
        False
    """

    id: UUID
    user_id: UUID
    token_hash: str
    refresh_token_hash: str
    expires_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    device_info: dict[str, Any] = field(default_factory=dict)
    last_activity_at: datetime | None = None
    is_active: bool = True
    invalidated_at: datetime | None = None
    invalidated_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_expired(self) -> bool:
        return datetime.now(UTC) >= self.expires_at

    def is_valid(self) -> bool:
        """Active and not past ``expires_at``."""
        return self.is_active and not self.is_expired()

    def invalidate(self, reason: str) -> bool:
        """Mark the session inactive.

        Idempotent: a second call keeps the first timestamp and reason.

        Args:
            reason: Why the session ended.

        Returns:
            bool: True if this call changed the session.
        """
        if not self.is_active:
            return False
        self.is_active = False
        self.invalidated_at = datetime.now(UTC)
        self.invalidated_reason = reason
        return True

    def rotate_tokens(self, token_hash: str, refresh_token_hash: str) -> None:
        """Replace both token hashes (refresh flow)."""
        self.token_hash = token_hash
        self.refresh_token_hash = refresh_token_hash
        self.last_activity_at = datetime.now(UTC)
