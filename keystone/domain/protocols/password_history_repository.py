"""PasswordHistoryRepository protocol (port)."""

from typing import Protocol
from uuid import UUID

from keystone.domain.entities import PasswordHistoryEntry


class PasswordHistoryRepository(Protocol):
    """Append-only password history."""

    async def add(self, entry: PasswordHistoryEntry) -> None:
        """Append an entry."""
        ...

    async def list_recent(self, user_id: UUID, limit: int) -> list[PasswordHistoryEntry]:
        """Most recent ``limit`` entries for a user, newest first."""
        ...
