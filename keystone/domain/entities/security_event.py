"""Security event entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from keystone.domain.enums import SecurityEventType, SecuritySeverity


@dataclass(slots=True, kw_only=True)
class SecurityEvent:
    """Severity-tagged incident, optionally linked to a user.

    Append-only apart from admin resolution (``resolved_at``/``resolved_by``).

    Attributes:
        id: Event identifier.
        event_type: What happened.
        severity: low, medium, high or critical.
        description: Human-readable summary.
        user_id: Affected user, if known.
        ip_address: Client IP, if known.
        user_agent: Raw user agent, if known.
        details: Extra structured context.
        created_at: When the event was recorded.
        resolved_at: When an admin resolved it.
        resolved_by: Admin who resolved it.
    """

    id: UUID
    event_type: SecurityEventType
    severity: SecuritySeverity
    description: str
    user_id: UUID | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    resolved_at: datetime | None = None
    resolved_by: UUID | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None

    def resolve(self, resolved_by: UUID) -> None:
        """Mark resolved. Re-resolving keeps the original resolver."""
        if self.is_resolved:
            return
        self.resolved_at = datetime.now(UTC)
        self.resolved_by = resolved_by
