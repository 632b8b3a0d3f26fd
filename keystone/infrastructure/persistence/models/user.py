"""User database model.

Security:
    - password_hash / password_salt: bcrypt output, never plaintext
    - failed_login_attempts / locked_until: durable lockout state, the
      cross-instance source of truth
    - status / is_active: lifecycle gate (see AccountStatus)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User account.

    Indexes:
        - email (unique, stored lowercase)
        - status (pending-approval queries)
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'active', 'rejected', 'suspended', 'inactive')",
            name="ck_users_status",
        ),
        CheckConstraint("role IN ('admin', 'editor', 'user')", name="ck_users_role"),
    )

    # =========================================================================
    # Identity
    # =========================================================================

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, lowercase)",
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="user",
        comment="admin, editor or user",
    )

    # =========================================================================
    # Credentials
    # =========================================================================

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )
    password_salt: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Bcrypt salt the hash was derived with",
    )
    password_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        index=True,
        comment="pending, active, rejected, suspended or inactive",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="True only while status is active",
    )
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # =========================================================================
    # Lockout
    # =========================================================================

    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed password checks (resets on success)",
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Login denied until this instant",
    )

    # =========================================================================
    # Activity
    # =========================================================================

    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    last_login_ip: Mapped[str | None] = mapped_column(
        String(45), nullable=True, default=None
    )
    last_activity_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    # =========================================================================
    # Provenance
    # =========================================================================

    created_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True, default=None)
    updated_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True, default=None)
