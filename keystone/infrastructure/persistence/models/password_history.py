"""Password history database model (append-only)."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseModel


class PasswordHistory(BaseModel):
    """A previous credential of a user, consulted to block reuse."""

    __tablename__ = "password_history"
    __table_args__ = (Index("idx_password_history_user_time", "user_id", "created_at"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    password_salt: Mapped[str] = mapped_column(String(64), nullable=False)
