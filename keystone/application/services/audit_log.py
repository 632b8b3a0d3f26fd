"""Best-effort audit trail service.

Wraps the AuditProtocol adapter so that recording an action or a security
incident can never fail the operation being recorded. Write failures are
logged to the process logger and dropped.

Security events are also mirrored to the process logger at a level matching
their severity, so they stay visible when the audit store is down.

Usage:
    audit_log = AuditLog(audit=audit_adapter, logger=logger)
    await audit_log.log_activity(
        user_id=user.id,
        action=ActivityAction.USER_LOGIN,
        resource_type="session",
        resource_id=str(session.id),
        ip_address=ip,
    )
"""

from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import ActivityLogEntry, SecurityEvent
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import AuditError
from keystone.domain.protocols import AuditProtocol, LoggerProtocol


class AuditLog:
    """Append-only activity log and security event recorder.

    Writes are best-effort: ``log_activity`` and ``log_security_event``
    return None whatever happens to the underlying store. Reads and
    resolution return the adapter's Result so callers can report failures.
    """

    def __init__(self, audit: AuditProtocol, logger: LoggerProtocol) -> None:
        """Initialize audit log.

        Args:
            audit: Audit storage adapter.
            logger: Process logger for write failures and event mirroring.
        """
        self._audit = audit
        self._logger = logger

    async def log_activity(
        self,
        *,
        user_id: UUID | None,
        action: ActivityAction,
        resource_type: str | None = None,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        success: bool = True,
        error_message: str | None = None,
    ) -> None:
        """Record one action. Never raises."""
        entry = ActivityLogEntry(
            id=uuid7(),
            action=action,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            details=details or {},
            ip_address=ip_address,
            user_agent=user_agent,
            success=success,
            error_message=error_message,
        )
        try:
            result = await self._audit.record_activity(entry)
        except Exception as e:  # noqa: BLE001 - audit must not break the caller
            self._logger.error(
                "activity_log_write_failed", error=e, action=action.value
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "activity_log_write_failed",
                action=action.value,
                error_message=result.error.message,
            )

    async def log_security_event(
        self,
        *,
        event_type: SecurityEventType,
        severity: SecuritySeverity,
        description: str,
        user_id: UUID | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Record one security incident. Never raises."""
        event = SecurityEvent(
            id=uuid7(),
            event_type=event_type,
            severity=severity,
            description=description,
            user_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details or {},
        )
        self._mirror(event)

        try:
            result = await self._audit.record_security_event(event)
        except Exception as e:  # noqa: BLE001 - audit must not break the caller
            self._logger.error(
                "security_event_write_failed", error=e, event_type=event_type.value
            )
            return

        if isinstance(result, Failure):
            self._logger.warning(
                "security_event_write_failed",
                event_type=event_type.value,
                error_message=result.error.message,
            )

    async def list_activity(
        self, *, user_id: UUID | None = None, limit: int = 50, offset: int = 0
    ) -> Result[list[ActivityLogEntry], AuditError]:
        return await self._audit.query_activity(
            user_id=user_id, limit=limit, offset=offset
        )

    async def list_security_events(
        self,
        *,
        user_id: UUID | None = None,
        severity: SecuritySeverity | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[SecurityEvent], AuditError]:
        return await self._audit.query_security_events(
            user_id=user_id, severity=severity, limit=limit, offset=offset
        )

    async def resolve_security_event(
        self, event_id: UUID, resolved_by: UUID
    ) -> Result[SecurityEvent | None, AuditError]:
        """Mark a security event resolved.

        Returns:
            Success(event) once resolved (resolving twice is a no-op),
            Success(None) if no such event exists,
            Failure(AuditError) if the store could not be read or written.
        """
        found = await self._audit.find_security_event(event_id)
        if isinstance(found, Failure):
            return found

        event = found.value
        if event is None or event.is_resolved:
            return Success(value=event)

        event.resolve(resolved_by)
        saved = await self._audit.mark_security_event_resolved(event)
        if isinstance(saved, Failure):
            return saved
        return Success(value=event)

    def _mirror(self, event: SecurityEvent) -> None:
        context = {
            "event_type": event.event_type.value,
            "severity": event.severity.value,
            "user_id": str(event.user_id) if event.user_id else None,
            "ip_address": event.ip_address,
        }
        match event.severity:
            case SecuritySeverity.CRITICAL:
                self._logger.critical(event.description, **context)
            case SecuritySeverity.HIGH:
                self._logger.error(event.description, **context)
            case SecuritySeverity.MEDIUM:
                self._logger.warning(event.description, **context)
            case _:
                self._logger.info(event.description, **context)
