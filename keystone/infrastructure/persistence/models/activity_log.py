"""Activity log database model (append-only).

No foreign key on user_id: activity must survive a hard delete of the
actor for compliance.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Boolean, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from keystone.infrastructure.persistence.base import BaseModel, JSONType


class ActivityLog(BaseModel):
    """Security-relevant action.

    Indexes:
        - idx_activity_logs_user_time: (user_id, created_at)
        - action
    """

    __tablename__ = "activity_logs"
    __table_args__ = (Index("idx_activity_logs_user_time", "user_id", "created_at"),)

    user_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    resource_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
