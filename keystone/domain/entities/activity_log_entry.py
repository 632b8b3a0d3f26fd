"""Activity log entry (append-only)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from keystone.domain.enums import ActivityAction


@dataclass(frozen=True, slots=True, kw_only=True)
class ActivityLogEntry:
    """Record of a security-relevant action.

    Attributes:
        id: Entry identifier.
        action: What was done.
        user_id: Actor (None for anonymous callers).
        resource_type: Kind of resource acted on (user, session...).
        resource_id: Identifier of that resource.
        details: Extra structured context.
        ip_address: Client IP.
        user_agent: Raw user agent.
        success: Whether the action succeeded.
        error_message: Failure reason when success is False.
        created_at: When the action happened.
    """

    id: UUID
    action: ActivityAction
    user_id: UUID | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None
    success: bool = True
    error_message: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
