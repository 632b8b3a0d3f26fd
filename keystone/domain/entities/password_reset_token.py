"""Password reset token entity.

Only the SHA-256 hash of the emailed token is stored.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class PasswordResetToken:
    """Single-use, short-lived password reset grant.

    Attributes:
        id: Token record identifier.
        user_id: Account the reset applies to.
        token_hash: SHA-256 hex digest of the raw token.
        expires_at: Expiry (default one hour after issue).
        used_at: When the token was consumed.
        ip_address: Requesting client IP.
        user_agent: Requesting user agent.
        created_at: Issue timestamp.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    used_at: datetime | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_valid(self) -> bool:
        """Unused and not expired."""
        return self.used_at is None and datetime.now(UTC) < self.expires_at

    def mark_used(self, at: datetime | None = None) -> None:
        self.used_at = at or datetime.now(UTC)
