"""PasswordHistoryRepository - SQLAlchemy adapter for password history."""

from uuid import UUID

from sqlalchemy import select

from keystone.domain.entities import PasswordHistoryEntry
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.password_history import PasswordHistory


class PasswordHistoryRepository:
    """SQLAlchemy password history repository (insert and read only)."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def add(self, entry: PasswordHistoryEntry) -> None:
        async with self._database.get_session() as session:
            session.add(
                PasswordHistory(
                    id=entry.id,
                    user_id=entry.user_id,
                    password_hash=entry.password_hash,
                    password_salt=entry.password_salt,
                    created_at=entry.created_at,
                )
            )

    async def list_recent(self, user_id: UUID, limit: int) -> list[PasswordHistoryEntry]:
        stmt = (
            select(PasswordHistory)
            .where(PasswordHistory.user_id == user_id)
            .order_by(PasswordHistory.created_at.desc())
            .limit(limit)
        )
        async with self._database.get_session() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [
                PasswordHistoryEntry(
                    id=row.id,
                    user_id=row.user_id,
                    password_hash=row.password_hash,
                    password_salt=row.password_salt,
                    created_at=row.created_at,
                )
                for row in rows
            ]
