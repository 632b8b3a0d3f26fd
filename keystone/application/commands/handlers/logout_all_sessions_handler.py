"""Logout all sessions handler.

Ends every active session of a user ("sign out everywhere"), optionally
keeping the caller's current session, and records it as both an activity
and a low-severity security event.
"""

from keystone.application.commands.auth_commands import LogoutAllSessions
from keystone.application.dtos import SessionsInvalidated
from keystone.application.services import AuditLog, SessionManager
from keystone.core.result import Result, Success
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError


class LogoutAllSessionsHandler:
    """Handler for the LogoutAllSessions command."""

    def __init__(self, session_manager: SessionManager, audit_log: AuditLog) -> None:
        self._session_manager = session_manager
        self._audit_log = audit_log

    async def handle(
        self, cmd: LogoutAllSessions
    ) -> Result[SessionsInvalidated, IdentityError]:
        """Invalidate the user's sessions.

        Returns:
            Success(SessionsInvalidated) with the number of sessions ended.
        """
        count = await self._session_manager.invalidate_all_sessions(
            cmd.user_id, "logout_all", except_session_id=cmd.except_session_id
        )

        details = {"sessions_invalidated": str(count)}
        if cmd.except_session_id is not None:
            details["kept_session_id"] = str(cmd.except_session_id)

        await self._audit_log.log_activity(
            user_id=cmd.user_id,
            action=ActivityAction.ALL_SESSIONS_LOGOUT,
            resource_type="user",
            resource_id=str(cmd.user_id),
            details=details,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        await self._audit_log.log_security_event(
            event_type=SecurityEventType.ALL_SESSIONS_INVALIDATED,
            severity=SecuritySeverity.LOW,
            description="User signed out of all sessions",
            user_id=cmd.user_id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            details=details,
        )
        return Success(value=SessionsInvalidated(count=count))
