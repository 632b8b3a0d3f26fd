"""SessionRepository - SQLAlchemy implementation of the SessionRepository port."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update

from keystone.domain.entities import Session
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy session repository.

    Does NOT inherit from the SessionRepository protocol (structural typing).
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def save(self, session: Session) -> None:
        async with self._database.get_session() as db:
            db.add(self._to_model(session))

    async def touch(self, session_id: UUID, at: datetime) -> bool:
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.is_active.is_(True),
                SessionModel.expires_at > at,
            )
            .values(last_activity_at=at)
        )
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return bool(result.rowcount)

    async def rotate_tokens(
        self,
        session_id: UUID,
        *,
        expected_refresh_hash: str,
        token_hash: str,
        refresh_token_hash: str,
        at: datetime,
    ) -> bool:
        """Compare-and-swap the token hashes of a live session."""
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.refresh_token_hash == expected_refresh_hash,
                SessionModel.is_active.is_(True),
                SessionModel.expires_at > at,
            )
            .values(
                token_hash=token_hash,
                refresh_token_hash=refresh_token_hash,
                last_activity_at=at,
            )
        )
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return bool(result.rowcount)

    async def invalidate(self, session_id: UUID, reason: str, at: datetime) -> bool:
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id, SessionModel.is_active.is_(True))
            .values(is_active=False, invalidated_at=at, invalidated_reason=reason)
        )
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return bool(result.rowcount)

    async def find_by_id(self, session_id: UUID) -> Session | None:
        async with self._database.get_session() as db:
            model = await db.get(SessionModel, session_id)
            return self._to_domain(model) if model else None

    async def find_by_user_id(
        self, user_id: UUID, *, active_only: bool = False
    ) -> list[Session]:
        stmt = select(SessionModel).where(SessionModel.user_id == user_id)
        if active_only:
            stmt = stmt.where(
                SessionModel.is_active.is_(True),
                SessionModel.expires_at > datetime.now(UTC),
            )
        stmt = stmt.order_by(SessionModel.created_at.desc())
        async with self._database.get_session() as db:
            rows = (await db.execute(stmt)).scalars().all()
            return [self._to_domain(row) for row in rows]

    async def invalidate_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        """Bulk-invalidate a user's active sessions in one UPDATE."""
        stmt = (
            update(SessionModel)
            .where(SessionModel.user_id == user_id, SessionModel.is_active.is_(True))
            .values(
                is_active=False,
                invalidated_at=datetime.now(UTC),
                invalidated_reason=reason,
            )
        )
        if except_session_id is not None:
            stmt = stmt.where(SessionModel.id != except_session_id)
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return int(result.rowcount or 0)

    def _to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            refresh_token_hash=model.refresh_token_hash,
            expires_at=model.expires_at,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            device_info=dict(model.device_info or {}),
            last_activity_at=model.last_activity_at,
            is_active=model.is_active,
            invalidated_at=model.invalidated_at,
            invalidated_reason=model.invalidated_reason,
            created_at=model.created_at,
        )

    def _to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            token_hash=session.token_hash,
            refresh_token_hash=session.refresh_token_hash,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            device_info=session.device_info,
            last_activity_at=session.last_activity_at,
            is_active=session.is_active,
            invalidated_at=session.invalidated_at,
            invalidated_reason=session.invalidated_reason,
            created_at=session.created_at,
        )
