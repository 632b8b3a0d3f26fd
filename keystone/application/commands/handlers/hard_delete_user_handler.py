"""Hard delete user handler.

Permanently removes an account. Sessions, login history, password history
and reset tokens cascade with it; the activity log and security events keep
their rows (they carry the user id without a foreign key).

Flow:
1. Load the user (USER_NOT_FOUND)
2. Refuse self-deletion
3. Record the deletion (high-severity security event) while the user
   details are still available
4. Delete
5. Return Success(UserView) of the removed account
"""

from keystone.application.commands.user_commands import HardDeleteUser
from keystone.application.dtos import UserView
from keystone.application.services import AuditLog, CredentialStore
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import LoggerProtocol


class HardDeleteUserHandler:
    """Handler for the HardDeleteUser command."""

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        audit_log: AuditLog,
        logger: LoggerProtocol,
    ) -> None:
        self._credential_store = credential_store
        self._audit_log = audit_log
        self._logger = logger

    async def handle(self, cmd: HardDeleteUser) -> Result[UserView, IdentityError]:
        user = await self._credential_store.get_user_by_id(cmd.user_id)
        if user is None:
            return Failure(error=IdentityError.of(ErrorCode.USER_NOT_FOUND))

        if cmd.actor_id == user.id:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_STATUS_TRANSITION))

        view = UserView.from_user(user)
        details = {"email": user.email, "status": user.status.value}
        if cmd.reason:
            details["reason"] = cmd.reason

        await self._audit_log.log_security_event(
            event_type=SecurityEventType.USER_HARD_DELETED,
            severity=SecuritySeverity.HIGH,
            description="User account permanently deleted",
            user_id=user.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            details={**details, "actor_id": str(cmd.actor_id)},
        )

        if not await self._credential_store.delete_user(user.id):
            return Failure(error=IdentityError.of(ErrorCode.USER_NOT_FOUND))

        await self._audit_log.log_activity(
            user_id=cmd.actor_id,
            action=ActivityAction.USER_HARD_DELETED,
            resource_type="user",
            resource_id=str(user.id),
            details=details,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        self._logger.warning(
            "user_hard_deleted", user_id=str(user.id), actor_id=str(cmd.actor_id)
        )
        return Success(value=view)
