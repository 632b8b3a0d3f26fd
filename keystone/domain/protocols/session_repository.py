"""SessionRepository protocol (port) for session persistence."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from keystone.domain.entities import Session


class SessionRepository(Protocol):
    """Session persistence port.

    Sessions are never deleted by normal flows; they are invalidated.
    No write can set a session active again.
    """

    async def save(self, session: Session) -> None:
        """Insert a new session."""
        ...

    async def touch(self, session_id: UUID, at: datetime) -> bool:
        """Stamp last_activity_at on a live session.

        Returns:
            False if the session is gone, invalidated or expired.
        """
        ...

    async def rotate_tokens(
        self,
        session_id: UUID,
        *,
        expected_refresh_hash: str,
        token_hash: str,
        refresh_token_hash: str,
        at: datetime,
    ) -> bool:
        """Swap both token hashes on a live session.

        Applies only while the stored refresh hash still equals
        ``expected_refresh_hash``, so a refresh token rotates at most once.

        Returns:
            False if the session is not live or was already rotated.
        """
        ...

    async def invalidate(self, session_id: UUID, reason: str, at: datetime) -> bool:
        """Mark one active session inactive.

        Returns:
            True if this call ended the session.
        """
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID, None if absent."""
        ...

    async def find_by_user_id(
        self, user_id: UUID, *, active_only: bool = False
    ) -> list[Session]:
        """List a user's sessions, newest first.

        Args:
            user_id: Owning user.
            active_only: Only sessions that are active and unexpired.
        """
        ...

    async def invalidate_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        """Bulk-mark a user's active sessions inactive.

        Returns:
            Number of sessions invalidated.
        """
        ...
