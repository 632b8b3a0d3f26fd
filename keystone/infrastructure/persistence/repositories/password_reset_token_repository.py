"""PasswordResetTokenRepository - SQLAlchemy adapter for reset tokens."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update

from keystone.domain.entities import PasswordResetToken
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken as PasswordResetTokenModel,
)


class PasswordResetTokenRepository:
    """SQLAlchemy reset token repository."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def save(self, token: PasswordResetToken) -> None:
        async with self._database.get_session() as session:
            session.add(
                PasswordResetTokenModel(
                    id=token.id,
                    user_id=token.user_id,
                    token_hash=token.token_hash,
                    expires_at=token.expires_at,
                    used_at=token.used_at,
                    ip_address=token.ip_address,
                    user_agent=token.user_agent,
                    created_at=token.created_at,
                )
            )

    async def mark_used(self, token_id: UUID, at: datetime) -> bool:
        stmt = (
            update(PasswordResetTokenModel)
            .where(
                PasswordResetTokenModel.id == token_id,
                PasswordResetTokenModel.used_at.is_(None),
            )
            .values(used_at=at)
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return bool(result.rowcount)

    async def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        stmt = select(PasswordResetTokenModel).where(
            PasswordResetTokenModel.token_hash == token_hash
        )
        async with self._database.get_session() as session:
            model = (await session.execute(stmt)).scalar_one_or_none()
            if model is None:
                return None
            return PasswordResetToken(
                id=model.id,
                user_id=model.user_id,
                token_hash=model.token_hash,
                expires_at=model.expires_at,
                used_at=model.used_at,
                ip_address=model.ip_address,
                user_agent=model.user_agent,
                created_at=model.created_at,
            )

    async def count_issued_since(self, user_id: UUID, since: datetime) -> int:
        stmt = select(func.count(PasswordResetTokenModel.id)).where(
            PasswordResetTokenModel.user_id == user_id,
            PasswordResetTokenModel.created_at >= since,
        )
        async with self._database.get_session() as session:
            return int((await session.execute(stmt)).scalar_one())
