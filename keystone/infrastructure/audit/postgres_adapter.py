"""PostgreSQL implementation of AuditProtocol.

Append-only activity log and security events on async SQLAlchemy.
Each write runs in its own session, so a failed audit write can never roll
back the primary operation's transaction.

Error handling:
    Database errors come back as ``Failure(AuditError)``; nothing is raised.
    The application audit service decides what to do with them (log and
    move on).

Usage:
    adapter = PostgresAuditAdapter(database)
    result = await adapter.record_security_event(event)
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import ActivityLogEntry, SecurityEvent
from keystone.domain.enums import (
    ActivityAction,
    SecurityEventType,
    SecuritySeverity,
)
from keystone.domain.errors import AuditError
from keystone.infrastructure.persistence.database import Database
from keystone.infrastructure.persistence.models.activity_log import ActivityLog
from keystone.infrastructure.persistence.models.security_event import (
    SecurityEvent as SecurityEventModel,
)


def _audit_failure(message: str, e: Exception, **details: str) -> Failure[AuditError]:
    return Failure(
        error=AuditError(
            code=ErrorCode.AUDIT_RECORD_FAILED,
            message=f"{message}: {e}",
            details={**details, "error_type": type(e).__name__},
        )
    )


class PostgresAuditAdapter:
    """PostgreSQL audit adapter.

    Stateless; all state lives in the database.

    Args:
        database: Database whose pool provides per-write sessions.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def record_activity(self, entry: ActivityLogEntry) -> Result[None, AuditError]:
        """Append an activity log entry.

        Returns:
            Success(None) once committed, Failure(AuditError) on database error.
        """
        try:
            async with self._database.get_session() as session:
                session.add(
                    ActivityLog(
                        id=entry.id,
                        user_id=entry.user_id,
                        action=entry.action.value,
                        resource_type=entry.resource_type,
                        resource_id=entry.resource_id,
                        details=entry.details,
                        ip_address=entry.ip_address,
                        user_agent=entry.user_agent,
                        success=entry.success,
                        error_message=entry.error_message,
                        created_at=entry.created_at,
                    )
                )
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure(
                "Failed to record activity", e, action=entry.action.value
            )
        return Success(value=None)

    async def record_security_event(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        """Append a security event.

        Returns:
            Success(None) once committed, Failure(AuditError) on database error.
        """
        try:
            async with self._database.get_session() as session:
                session.add(
                    SecurityEventModel(
                        id=event.id,
                        user_id=event.user_id,
                        event_type=event.event_type.value,
                        severity=event.severity.value,
                        description=event.description,
                        ip_address=event.ip_address,
                        user_agent=event.user_agent,
                        details=event.details,
                        created_at=event.created_at,
                    )
                )
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure(
                "Failed to record security event",
                e,
                event_type=event.event_type.value,
                severity=event.severity.value,
            )
        return Success(value=None)

    async def query_activity(
        self, *, user_id: UUID | None = None, limit: int = 50, offset: int = 0
    ) -> Result[list[ActivityLogEntry], AuditError]:
        stmt = select(ActivityLog).order_by(ActivityLog.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(ActivityLog.user_id == user_id)
        try:
            async with self._database.get_session() as session:
                rows = (await session.execute(stmt.limit(limit).offset(offset))).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure("Failed to query activity", e)
        return Success(value=[self._activity_to_domain(row) for row in rows])

    async def query_security_events(
        self,
        *,
        user_id: UUID | None = None,
        severity: SecuritySeverity | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[SecurityEvent], AuditError]:
        stmt = select(SecurityEventModel).order_by(SecurityEventModel.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(SecurityEventModel.user_id == user_id)
        if severity is not None:
            stmt = stmt.where(SecurityEventModel.severity == severity.value)
        try:
            async with self._database.get_session() as session:
                rows = (await session.execute(stmt.limit(limit).offset(offset))).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure("Failed to query security events", e)
        return Success(value=[self._event_to_domain(row) for row in rows])

    async def find_security_event(
        self, event_id: UUID
    ) -> Result[SecurityEvent | None, AuditError]:
        try:
            async with self._database.get_session() as session:
                model = await session.get(SecurityEventModel, event_id)
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure("Failed to load security event", e)
        return Success(value=self._event_to_domain(model) if model else None)

    async def mark_security_event_resolved(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        """Persist resolution. Other columns are never updated."""
        try:
            async with self._database.get_session() as session:
                model = await session.get(SecurityEventModel, event.id)
                if model is not None:
                    model.resolved_at = event.resolved_at
                    model.resolved_by = event.resolved_by
        except (SQLAlchemyError, OSError) as e:
            return _audit_failure("Failed to resolve security event", e)
        return Success(value=None)

    def _activity_to_domain(self, model: ActivityLog) -> ActivityLogEntry:
        return ActivityLogEntry(
            id=model.id,
            user_id=model.user_id,
            action=ActivityAction(model.action),
            resource_type=model.resource_type,
            resource_id=model.resource_id,
            details=dict(model.details or {}),
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            success=model.success,
            error_message=model.error_message,
            created_at=model.created_at,
        )

    def _event_to_domain(self, model: SecurityEventModel) -> SecurityEvent:
        details: dict[str, Any] = dict(model.details or {})
        return SecurityEvent(
            id=model.id,
            user_id=model.user_id,
            event_type=SecurityEventType(model.event_type),
            severity=SecuritySeverity(model.severity),
            description=model.description,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            details=details,
            created_at=model.created_at,
            resolved_at=model.resolved_at,
            resolved_by=model.resolved_by,
        )
