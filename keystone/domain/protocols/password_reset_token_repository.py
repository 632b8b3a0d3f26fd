"""PasswordResetTokenRepository protocol (port)."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from keystone.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(Protocol):
    """Persistence for hashed password reset tokens."""

    async def save(self, token: PasswordResetToken) -> None:
        """Insert a new token record."""
        ...

    async def mark_used(self, token_id: UUID, at: datetime) -> bool:
        """Consume a token that is still unused.

        Returns:
            False if it was already consumed.
        """
        ...

    async def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        """Find a token by its SHA-256 hash, None if absent."""
        ...

    async def count_issued_since(self, user_id: UUID, since: datetime) -> int:
        """Count tokens issued to a user at or after ``since``."""
        ...
