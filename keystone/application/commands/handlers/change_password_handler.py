"""Change password handler.

Flow:
1. Load the user (USER_NOT_FOUND)
2. Self-service changes must present the correct current password
   (INVALID_CURRENT_PASSWORD); admin changes (``changed_by`` set) may skip it
3. Admin changes without a new password get a generated temporary one
4. Replace the password (WEAK_PASSWORD, PASSWORD_REUSED)
5. Invalidate every session of the user
6. Notify the owner and record the activity
7. Return Success(PasswordChanged)
"""

from keystone.application.commands.password_commands import ChangePassword
from keystone.application.dtos import PasswordChanged
from keystone.application.services import (
    AuditLog,
    CredentialStore,
    PasswordPolicy,
    SessionManager,
)
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import EmailServiceProtocol, LoggerProtocol


class ChangePasswordHandler:
    """Handler for the ChangePassword command."""

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        password_policy: PasswordPolicy,
        session_manager: SessionManager,
        email_service: EmailServiceProtocol,
        audit_log: AuditLog,
        logger: LoggerProtocol,
    ) -> None:
        self._credential_store = credential_store
        self._password_policy = password_policy
        self._session_manager = session_manager
        self._email_service = email_service
        self._audit_log = audit_log
        self._logger = logger

    async def handle(self, cmd: ChangePassword) -> Result[PasswordChanged, IdentityError]:
        user = await self._credential_store.get_user_by_id(cmd.user_id)
        if user is None:
            return Failure(error=IdentityError.of(ErrorCode.USER_NOT_FOUND))

        admin_change = cmd.changed_by is not None and cmd.changed_by != user.id
        if not admin_change:
            if not cmd.current_password or not await self._password_policy.verify_password(
                cmd.current_password, user.password_hash, user.password_salt
            ):
                await self._audit_log.log_security_event(
                    event_type=SecurityEventType.PASSWORD_CHANGE_FAILED,
                    severity=SecuritySeverity.MEDIUM,
                    description="Password change with wrong current password",
                    user_id=user.id,
                    ip_address=cmd.ip_address,
                    user_agent=cmd.user_agent,
                )
                return Failure(error=IdentityError.of(ErrorCode.INVALID_CURRENT_PASSWORD))

        temporary_password = None
        new_password = cmd.new_password or ""
        if admin_change and cmd.new_password is None:
            temporary_password = new_password = (
                self._password_policy.generate_secure_password()
            )

        updated = await self._credential_store.update_password(
            user, new_password, actor_id=cmd.changed_by if admin_change else None
        )
        if isinstance(updated, Failure):
            return updated

        count = await self._session_manager.invalidate_all_sessions(
            user.id, "password_changed"
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
            user_id=cmd.changed_by or user.id,
            action=ActivityAction.PASSWORD_CHANGED,
            resource_type="user",
            resource_id=str(user.id),
            details={
                "changed_by_admin": str(admin_change).lower(),
                "temporary_password_issued": str(temporary_password is not None).lower(),
                "sessions_invalidated": str(count),
            },
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        return Success(
            value=PasswordChanged(
                user_id=user.id,
                sessions_invalidated=count,
                temporary_password=temporary_password,
            )
        )
