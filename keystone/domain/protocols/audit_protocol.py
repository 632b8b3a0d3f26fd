"""Audit trail protocol (port).

Two append-only streams:
    - Activity log: every security-relevant action (who/what/when/where)
    - Security events: severity-tagged incidents, resolvable by admins

All methods return Result types. Adapters NEVER raise; storage failures
come back as ``Failure(AuditError(...))``.

Usage:
    result = await audit.record_activity(entry)
    match result:
        case Failure(error=error):
            logger.warning("audit_write_failed", error_message=error.message)
"""

from typing import Protocol
from uuid import UUID

from keystone.core.result import Result
from keystone.domain.entities import ActivityLogEntry, SecurityEvent
from keystone.domain.enums import SecuritySeverity
from keystone.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Protocol for audit storage adapters.

    Implementations:
        - PostgresAuditAdapter: keystone/infrastructure/audit/postgres_adapter.py
    """

    async def record_activity(self, entry: ActivityLogEntry) -> Result[None, AuditError]:
        """Append an activity log entry."""
        ...

    async def record_security_event(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        """Append a security event."""
        ...

    async def query_activity(
        self, *, user_id: UUID | None = None, limit: int = 50, offset: int = 0
    ) -> Result[list[ActivityLogEntry], AuditError]:
        """List activity entries, newest first."""
        ...

    async def query_security_events(
        self,
        *,
        user_id: UUID | None = None,
        severity: SecuritySeverity | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[SecurityEvent], AuditError]:
        """List security events, newest first."""
        ...

    async def find_security_event(
        self, event_id: UUID
    ) -> Result[SecurityEvent | None, AuditError]:
        """Fetch one security event."""
        ...

    async def mark_security_event_resolved(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        """Persist ``resolved_at``/``resolved_by``. The only allowed update."""
        ...
