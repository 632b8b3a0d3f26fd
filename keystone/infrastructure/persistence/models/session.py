"""Session database model.

Stores SHA-256 digests of the access and refresh tokens, never the tokens.
Rows are invalidated (``is_active = false``), not deleted, except by the
cascade of a compliance hard delete of the owning user.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseMutableModel, JSONType


class Session(BaseMutableModel):
    """Authenticated session.

    Indexes:
        - user_id: a user's sessions
        - idx_sessions_user_active: (user_id, is_active, expires_at) for
          active-session queries and bulk invalidation
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("idx_sessions_user_active", "user_id", "is_active", "expires_at"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this session",
    )

    # =========================================================================
    # Token digests
    # =========================================================================

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="SHA-256 hex digest of the access token",
    )
    refresh_token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="SHA-256 hex digest of the refresh token",
    )

    # =========================================================================
    # Client
    # =========================================================================

    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    device_info: Mapped[dict[str, Any]] = mapped_column(
        JSONType, nullable=False, default=dict
    )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Server-side expiry (independent of token exp claim)",
    )
    last_activity_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    invalidated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    invalidated_reason: Mapped[str | None] = mapped_column(String(100), nullable=True)
