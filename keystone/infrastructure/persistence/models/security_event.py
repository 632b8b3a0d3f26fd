"""Security event database model.

Append-only apart from the resolution columns.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseModel, JSONType


class SecurityEvent(BaseModel):
    """Severity-tagged security incident.

    Indexes:
        - idx_security_events_severity_time: (severity, created_at)
        - idx_security_events_user_time: (user_id, created_at)
    """

    __tablename__ = "security_events"
    __table_args__ = (
        CheckConstraint(
            "severity IN ('low', 'medium', 'high', 'critical')",
            name="ck_security_events_severity",
        ),
        Index("idx_security_events_severity_time", "severity", "created_at"),
        Index("idx_security_events_user_time", "user_id", "created_at"),
    )

    user_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    event_type: Mapped[str] = mapped_column(String(60), nullable=False)
    severity: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    resolved_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
