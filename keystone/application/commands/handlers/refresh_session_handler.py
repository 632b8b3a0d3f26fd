"""Refresh session handler.

Flow:
1. Find the session; it must be active and unexpired
2. Verify the refresh token against the stored hash
3. Owner must still pass the login gate (otherwise the session ends)
4. Rotate both tokens; old ones stop working
5. Return Success(IssuedSession)
"""

from keystone.application.commands.auth_commands import RefreshSession
from keystone.application.dtos import IssuedSession
from keystone.application.services import SessionManager
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import LoggerProtocol


class RefreshSessionHandler:
    """Handler for the RefreshSession command."""

    def __init__(self, session_manager: SessionManager, logger: LoggerProtocol) -> None:
        self._session_manager = session_manager
        self._logger = logger

    async def handle(self, cmd: RefreshSession) -> Result[IssuedSession, IdentityError]:
        if not cmd.refresh_token:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_SESSION))

        try:
            return await self._session_manager.refresh_session(
                cmd.session_id,
                cmd.refresh_token,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
            )
        except Exception as e:  # noqa: BLE001 - never leak infrastructure detail
            self._logger.error(
                "session_refresh_error", error=e, session_id=str(cmd.session_id)
            )
            return Failure(error=IdentityError.of(ErrorCode.VALIDATION_ERROR))
