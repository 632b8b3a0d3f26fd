"""LoginHistoryRepository - SQLAlchemy adapter for the append-only login history."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select

from keystone.domain.entities import LoginHistoryEntry
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.login_history import LoginHistory


class LoginHistoryRepository:
    """SQLAlchemy login history repository (insert and read only)."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def add(self, entry: LoginHistoryEntry) -> None:
        async with self._database.get_session() as session:
            session.add(
                LoginHistory(
                    id=entry.id,
                    user_id=entry.user_id,
                    ip_address=entry.ip_address,
                    user_agent=entry.user_agent,
                    device_type=entry.device_type,
                    browser=entry.browser,
                    success=entry.success,
                    failure_reason=entry.failure_reason,
                    created_at=entry.created_at,
                )
            )

    async def list_for_user(
        self, user_id: UUID, *, limit: int = 50, offset: int = 0
    ) -> list[LoginHistoryEntry]:
        stmt = (
            select(LoginHistory)
            .where(LoginHistory.user_id == user_id)
            .order_by(LoginHistory.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self._database.get_session() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_domain(row) for row in rows]

    async def count_failures_since(self, user_id: UUID, since: datetime) -> int:
        stmt = select(func.count(LoginHistory.id)).where(
            LoginHistory.user_id == user_id,
            LoginHistory.success.is_(False),
            LoginHistory.created_at >= since,
        )
        async with self._database.get_session() as session:
            return int((await session.execute(stmt)).scalar_one())

    async def has_success_from_ip(
        self,
        user_id: UUID,
        ip_address: str,
        since: datetime,
        *,
        before: datetime | None = None,
    ) -> bool:
        stmt = select(LoginHistory.id).where(
            LoginHistory.user_id == user_id,
            LoginHistory.ip_address == ip_address,
            LoginHistory.success.is_(True),
            LoginHistory.created_at >= since,
        )
        if before is not None:
            stmt = stmt.where(LoginHistory.created_at < before)
        async with self._database.get_session() as session:
            return (await session.execute(stmt.limit(1))).first() is not None

    def _to_domain(self, model: LoginHistory) -> LoginHistoryEntry:
        return LoginHistoryEntry(
            id=model.id,
            user_id=model.user_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            device_type=model.device_type,
            browser=model.browser,
            success=model.success,
            failure_reason=model.failure_reason,
            created_at=model.created_at,
        )
