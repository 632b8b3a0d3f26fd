"""LoginHistoryRepository protocol (port)."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from keystone.domain.entities import LoginHistoryEntry


class LoginHistoryRepository(Protocol):
    """Append-only login history."""

    async def add(self, entry: LoginHistoryEntry) -> None:
        """Append an entry."""
        ...

    async def list_for_user(
        self, user_id: UUID, *, limit: int = 50, offset: int = 0
    ) -> list[LoginHistoryEntry]:
        """List entries for a user, newest first."""
        ...

    async def count_failures_since(self, user_id: UUID, since: datetime) -> int:
        """Count failed attempts for a user at or after ``since``."""
        ...

    async def has_success_from_ip(
        self,
        user_id: UUID,
        ip_address: str,
        since: datetime,
        *,
        before: datetime | None = None,
    ) -> bool:
        """Whether the user logged in successfully from an IP in a window.

        Args:
            user_id: User to check.
            ip_address: Source IP.
            since: Window start (inclusive).
            before: Window end (exclusive). Open-ended when None.
        """
        ...
