"""Resolve security event handler.

Resolution is the only mutation a security event ever sees. Resolving an
already resolved event is a no-op that returns it unchanged.
"""

from keystone.application.commands.user_commands import ResolveSecurityEvent
from keystone.application.services import AuditLog
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import SecurityEvent
from keystone.domain.enums import ActivityAction
from keystone.domain.errors import IdentityError


class ResolveSecurityEventHandler:
    """Handler for the ResolveSecurityEvent command."""

    def __init__(self, audit_log: AuditLog) -> None:
        self._audit_log = audit_log

    async def handle(
        self, cmd: ResolveSecurityEvent
    ) -> Result[SecurityEvent, IdentityError]:
        """Mark the event resolved.

        Returns:
            Success(SecurityEvent) or Failure with SECURITY_EVENT_NOT_FOUND
            or AUDIT_RECORD_FAILED.
        """
        result = await self._audit_log.resolve_security_event(
            cmd.event_id, cmd.resolved_by
        )
        if isinstance(result, Failure):
            return Failure(error=IdentityError.of(ErrorCode.AUDIT_RECORD_FAILED))

        event = result.value
        if event is None:
            return Failure(error=IdentityError.of(ErrorCode.SECURITY_EVENT_NOT_FOUND))

        await self._audit_log.log_activity(
            user_id=cmd.resolved_by,
            action=ActivityAction.SECURITY_EVENT_RESOLVED,
            resource_type="security_event",
            resource_id=str(event.id),
            details={"event_type": event.event_type.value},
        )
        return Success(value=event)
