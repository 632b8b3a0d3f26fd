"""Confirm password reset handler.

Flow:
1. Hash the presented token and look it up
2. Token must exist, be unused and unexpired
3. Load the user
4. Check the new password against the strength and history rules
5. Consume the token (only one concurrent confirmation can win)
6. Replace the password and clear failed-login counters
7. Invalidate every session (force re-login)
8. Send a password-changed notification
9. Return Success(PasswordChanged)

A weak or reused password leaves the token unconsumed so the user can try
again with the same link.
"""

from datetime import UTC, datetime

from keystone.application.commands.password_commands import ConfirmPasswordReset
from keystone.application.dtos import PasswordChanged
from keystone.application.services import AuditLog, CredentialStore, SessionManager
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.enums import ActivityAction
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import (
    EmailServiceProtocol,
    LoggerProtocol,
    OpaqueTokenProtocol,
    PasswordResetTokenRepository,
)


class ConfirmPasswordResetHandler:
    """Handler for the ConfirmPasswordReset command."""

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        session_manager: SessionManager,
        reset_token_repo: PasswordResetTokenRepository,
        opaque_tokens: OpaqueTokenProtocol,
        email_service: EmailServiceProtocol,
        audit_log: AuditLog,
        logger: LoggerProtocol,
    ) -> None:
        self._credential_store = credential_store
        self._session_manager = session_manager
        self._reset_token_repo = reset_token_repo
        self._opaque_tokens = opaque_tokens
        self._email_service = email_service
        self._audit_log = audit_log
        self._logger = logger

    async def handle(
        self, cmd: ConfirmPasswordReset
    ) -> Result[PasswordChanged, IdentityError]:
        """Handle the ConfirmPasswordReset command.

        Returns:
            Success(PasswordChanged) or Failure with INVALID_RESET_TOKEN,
            WEAK_PASSWORD or PASSWORD_REUSED.
        """
        if not cmd.token:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_RESET_TOKEN))

        token = await self._reset_token_repo.find_by_token_hash(
            self._opaque_tokens.hash_token(cmd.token)
        )
        if token is None or not token.is_valid():
            return Failure(error=IdentityError.of(ErrorCode.INVALID_RESET_TOKEN))

        user = await self._credential_store.get_user_by_id(token.user_id)
        if user is None:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_RESET_TOKEN))

        rejected = await self._credential_store.check_new_password(user, cmd.new_password)
        if rejected is not None:
            return rejected

        if not await self._reset_token_repo.mark_used(token.id, datetime.now(UTC)):
            return Failure(error=IdentityError.of(ErrorCode.INVALID_RESET_TOKEN))

        updated = await self._credential_store.update_password(user, cmd.new_password)
        if isinstance(updated, Failure):
            return updated
        await self._credential_store.reset_failure_counters(user)

        count = await self._session_manager.invalidate_all_sessions(
            user.id, "password_reset"
        )

        try:
            await self._email_service.send_password_changed_notification(user.email)
        except Exception as e:  # noqa: BLE001 - password is already changed
            self._logger.warning(
                "password_changed_notification_failed",
                user_id=str(user.id),
                error_type=type(e).__name__,
            )

        await self._audit_log.log_activity(
            user_id=user.id,
            action=ActivityAction.PASSWORD_RESET_COMPLETED,
            resource_type="user",
            resource_id=str(user.id),
            details={"sessions_invalidated": str(count)},
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        return Success(value=PasswordChanged(user_id=user.id, sessions_invalidated=count))
