"""Login history database model (append-only)."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseModel


class LoginHistory(BaseModel):
    """One login attempt against a known account.

    Indexes:
        - idx_login_history_user_time: (user_id, created_at) for the
          trailing-window heuristics
    """

    __tablename__ = "login_history"
    __table_args__ = (Index("idx_login_history_user_time", "user_id", "created_at"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    device_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    browser: Mapped[str | None] = mapped_column(String(100), nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    failure_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
