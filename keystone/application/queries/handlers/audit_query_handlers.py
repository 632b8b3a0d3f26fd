"""Audit trail query handlers.

Read failures of the audit store come back as AUDIT_RECORD_FAILED; unlike
writes, reads are not best-effort.
"""

from keystone.application.queries.audit_queries import GetUserActivity, ListSecurityEvents
from keystone.application.services import AuditLog
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import ActivityLogEntry, SecurityEvent
from keystone.domain.errors import IdentityError

MAX_PAGE_SIZE = 200


class ListSecurityEventsHandler:
    """Handler for the ListSecurityEvents query."""

    def __init__(self, audit_log: AuditLog) -> None:
        self._audit_log = audit_log

    async def handle(
        self, query: ListSecurityEvents
    ) -> Result[list[SecurityEvent], IdentityError]:
        result = await self._audit_log.list_security_events(
            user_id=query.user_id,
            severity=query.severity,
            limit=max(1, min(query.limit, MAX_PAGE_SIZE)),
            offset=max(0, query.offset),
        )
        if isinstance(result, Failure):
            return Failure(error=IdentityError.of(ErrorCode.AUDIT_RECORD_FAILED))
        return Success(value=result.value)


class GetUserActivityHandler:
    """Handler for the GetUserActivity query."""

    def __init__(self, audit_log: AuditLog) -> None:
        self._audit_log = audit_log

    async def handle(
        self, query: GetUserActivity
    ) -> Result[list[ActivityLogEntry], IdentityError]:
        result = await self._audit_log.list_activity(
            user_id=query.user_id,
            limit=max(1, min(query.limit, MAX_PAGE_SIZE)),
            offset=max(0, query.offset),
        )
        if isinstance(result, Failure):
            return Failure(error=IdentityError.of(ErrorCode.AUDIT_RECORD_FAILED))
        return Success(value=result.value)
