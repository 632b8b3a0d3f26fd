"""Logout user handler.

Flow:
1. Find the session
2. Check it belongs to the caller
3. Invalidate it (idempotent)
4. Record ``user_logout`` activity
5. Return Success(LogoutResult)

Logout always returns Success. ``success`` is False when the session does
not exist or belongs to someone else, so the caller learns nothing about
other users' sessions.
"""

from keystone.application.commands.auth_commands import LogoutUser
from keystone.application.dtos import LogoutResult
from keystone.application.services import AuditLog, SessionManager
from keystone.core.result import Result, Success
from keystone.domain.enums import ActivityAction
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import LoggerProtocol


class LogoutUserHandler:
    """Handler for the LogoutUser command."""

    def __init__(
        self,
        session_manager: SessionManager,
        audit_log: AuditLog,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize logout handler with dependencies.

        Args:
            session_manager: Session lookups and invalidation.
            audit_log: Activity trail.
            logger: Process logger.
        """
        self._session_manager = session_manager
        self._audit_log = audit_log
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[LogoutResult, IdentityError]:
        session = await self._session_manager.find_session(cmd.session_id)
        if session is None or session.user_id != cmd.user_id:
            self._logger.warning(
                "logout_session_not_owned",
                user_id=str(cmd.user_id),
                session_id=str(cmd.session_id),
            )
            return Success(value=LogoutResult(success=False))

        await self._session_manager.invalidate_session(session.id, "logout")
        await self._audit_log.log_activity(
            user_id=cmd.user_id,
            action=ActivityAction.USER_LOGOUT,
            resource_type="session",
            resource_id=str(session.id),
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        return Success(value=LogoutResult(success=True))
