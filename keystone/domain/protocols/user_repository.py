"""UserRepository protocol (port) for user persistence.

Lookups return None rather than raising when a user is absent so callers
can apply a uniform "invalid credentials" response.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from keystone.domain.entities import User
from keystone.domain.enums import AccountStatus


class UserRepository(Protocol):
    """User persistence port.

    Writes touch only the columns they own, so a stale entity never
    overwrites a concurrent change.

    Implementations:
        - UserRepository (SQLAlchemy): keystone/infrastructure/persistence/repositories
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID, None if absent."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive), None if absent."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email (case-insensitive) is taken."""
        ...

    async def save(self, user: User) -> None:
        """Insert a new user."""
        ...

    async def update_status(self, user: User, *, expected: AccountStatus) -> bool:
        """Write a status transition if the stored status is still ``expected``.

        Persists status, is_active, email_verified, updated_by and updated_at
        only.

        Returns:
            False if the user is gone or another transition got there first.
        """
        ...

    async def update_password(self, user: User) -> None:
        """Write password hash, salt and password_changed_at."""
        ...

    async def record_login(
        self, user_id: UUID, ip_address: str | None, at: datetime
    ) -> None:
        """Stamp last_login_at, last_login_ip and last_activity_at."""
        ...

    async def touch_activity(self, user_id: UUID, at: datetime) -> None:
        """Stamp last_activity_at."""
        ...

    async def increment_failed_logins(
        self, user_id: UUID, *, max_attempts: int, lock_until: datetime, now: datetime
    ) -> tuple[int, datetime | None]:
        """Atomically count one wrong password.

        A lock that expired at or before ``now`` is discarded first, so the
        count restarts at one. Reaching ``max_attempts`` while not locked
        sets ``locked_until`` to ``lock_until``; a live lock is kept as is.

        Returns:
            (failed_login_attempts, locked_until) after the increment.
        """
        ...

    async def reset_failed_logins(self, user_id: UUID) -> None:
        """Zero the failure counter and clear the lock."""
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Irreversibly delete a user and cascade its owned rows.

        Returns:
            True if a row was deleted.
        """
        ...

    async def list_by_status(
        self, status: AccountStatus, *, limit: int = 50, offset: int = 0
    ) -> list[User]:
        """List users in a status, oldest first."""
        ...
