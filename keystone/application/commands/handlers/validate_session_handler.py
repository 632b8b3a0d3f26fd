"""Validate session handler.

Thin boundary around SessionManager.validate_session: expected mismatches
come back as INVALID_SESSION or USER_INACTIVE; an infrastructure exception
becomes VALIDATION_ERROR with no internal detail.
"""

from keystone.application.commands.auth_commands import ValidateSession
from keystone.application.dtos import SessionValidated
from keystone.application.services import SessionManager
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import LoggerProtocol


class ValidateSessionHandler:
    """Handler for the ValidateSession command."""

    def __init__(self, session_manager: SessionManager, logger: LoggerProtocol) -> None:
        self._session_manager = session_manager
        self._logger = logger

    async def handle(self, cmd: ValidateSession) -> Result[SessionValidated, IdentityError]:
        """Validate a presented access token.

        Returns:
            Success(SessionValidated) or Failure with INVALID_SESSION,
            USER_INACTIVE or VALIDATION_ERROR.
        """
        if not cmd.token:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_SESSION))

        try:
            return await self._session_manager.validate_session(
                cmd.session_id,
                cmd.token,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
            )
        except Exception as e:  # noqa: BLE001 - never leak infrastructure detail
            self._logger.error(
                "session_validation_error", error=e, session_id=str(cmd.session_id)
            )
            return Failure(error=IdentityError.of(ErrorCode.VALIDATION_ERROR))
