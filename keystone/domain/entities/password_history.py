"""Password history entry (append-only)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordHistoryEntry:
    """A previously stored credential, kept to block reuse.

    Attributes:
        id: Entry identifier.
        user_id: Owning user.
        password_hash: Bcrypt hash.
        password_salt: Salt the hash was generated with.
        created_at: When the password was set.
    """

    id: UUID
    user_id: UUID
    password_hash: str
    password_salt: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
