"""create_identity_tables

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 06:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1a9c2e7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_and_created_at() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Create users, sessions, history, reset token and audit tables."""
    op.create_table(
        "users",
        *_id_and_created_at(),
        _updated_at(),
        # Identity
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="User email address (unique, lowercase)",
        ),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column(
            "role", sa.String(length=20), nullable=False, comment="admin, editor or user"
        ),
        # Credentials
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        sa.Column(
            "password_salt",
            sa.String(length=64),
            nullable=False,
            comment="Bcrypt salt the hash was derived with",
        ),
        sa.Column("password_changed_at", sa.DateTime(timezone=True), nullable=True),
        # Lifecycle
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="pending, active, rejected, suspended or inactive",
        ),
        sa.Column(
            "is_active",
            sa.Boolean(),
            nullable=False,
            comment="True only while status is active",
        ),
        sa.Column("email_verified", sa.Boolean(), nullable=False),
        # Lockout
        sa.Column(
            "failed_login_attempts",
            sa.Integer(),
            nullable=False,
            comment="Consecutive failed password checks (resets on success)",
        ),
        sa.Column(
            "locked_until",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Login denied until this instant",
        ),
        # Activity
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_ip", sa.String(length=45), nullable=True),
        sa.Column("last_activity_at", sa.DateTime(timezone=True), nullable=True),
        # Provenance
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("updated_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'rejected', 'suspended', 'inactive')",
            name="ck_users_status",
        ),
        sa.CheckConstraint("role IN ('admin', 'editor', 'user')", name="ck_users_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_status", "users", ["status"])

    op.create_table(
        "sessions",
        *_id_and_created_at(),
        _updated_at(),
        sa.Column(
            "user_id", sa.Uuid(), nullable=False, comment="User who owns this session"
        ),
        sa.Column(
            "token_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the access token",
        ),
        sa.Column(
            "refresh_token_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the refresh token",
        ),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column(
            "device_info",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Server-side expiry (independent of token exp claim)",
        ),
        sa.Column("last_activity_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("invalidated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invalidated_reason", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("refresh_token_hash"),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])
    op.create_index(
        "idx_sessions_user_active", "sessions", ["user_id", "is_active", "expires_at"]
    )

    op.create_table(
        "login_history",
        *_id_and_created_at(),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("device_type", sa.String(length=20), nullable=True),
        sa.Column("browser", sa.String(length=100), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("failure_reason", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_login_history_user_time", "login_history", ["user_id", "created_at"]
    )

    op.create_table(
        "password_history",
        *_id_and_created_at(),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("password_salt", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_password_history_user_time", "password_history", ["user_id", "created_at"]
    )

    op.create_table(
        "password_reset_tokens",
        *_id_and_created_at(),
        _updated_at(),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "token_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the reset token",
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("token_hash"),
    )
    op.create_index(
        "ix_password_reset_tokens_user_id", "password_reset_tokens", ["user_id"]
    )

    # Audit tables: no foreign keys so rows outlive a hard-deleted user
    op.create_table(
        "activity_logs",
        *_id_and_created_at(),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("resource_type", sa.String(length=50), nullable=True),
        sa.Column("resource_id", sa.String(length=100), nullable=True),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_logs_action", "activity_logs", ["action"])
    op.create_index(
        "idx_activity_logs_user_time", "activity_logs", ["user_id", "created_at"]
    )

    op.create_table(
        "security_events",
        *_id_and_created_at(),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("event_type", sa.String(length=60), nullable=False),
        sa.Column("severity", sa.String(length=10), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "severity IN ('low', 'medium', 'high', 'critical')",
            name="ck_security_events_severity",
        ),
    )
    op.create_index(
        "idx_security_events_severity_time",
        "security_events",
        ["severity", "created_at"],
    )
    op.create_index(
        "idx_security_events_user_time", "security_events", ["user_id", "created_at"]
    )


def downgrade() -> None:
    """Drop identity tables (children first)."""
    op.drop_table("security_events")
    op.drop_table("activity_logs")
    op.drop_table("password_reset_tokens")
    op.drop_table("password_history")
    op.drop_table("login_history")
    op.drop_table("sessions")
    op.drop_table("users")
