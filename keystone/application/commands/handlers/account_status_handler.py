"""Account status handler (admin lifecycle actions).

Transitions (enforced by AccountStatus):
    pending   -> active (approve), rejected (reject), inactive (soft delete)
    active    -> suspended (suspend), inactive (soft delete)
    suspended -> active (reinstate), inactive (soft delete)
    rejected  -> active (approve), inactive (soft delete)
    inactive  -> active (reactivate)

Leaving ACTIVE ends every session of the account. Administrators cannot
suspend, reject or delete their own account.

A transition is written only while the stored status is still the one it
started from. When two admins race, the later one gets
INVALID_STATUS_TRANSITION.
"""

from uuid import UUID

from keystone.application.commands.user_commands import ChangeAccountStatus
from keystone.application.dtos import UserView
from keystone.application.services import AuditLog, CredentialStore, SessionManager
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.enums import (
    AccountStatus,
    ActivityAction,
    SecurityEventType,
    SecuritySeverity,
)
from keystone.domain.errors import IdentityError, InvalidStatusTransition
from keystone.domain.protocols import LoggerProtocol

_SESSION_END_REASONS = {
    AccountStatus.SUSPENDED: "user_suspended",
    AccountStatus.INACTIVE: "user_deactivated",
    AccountStatus.REJECTED: "user_rejected",
}


class AccountStatusHandler:
    """Handler for the ChangeAccountStatus command.

    Usage:
        handler = AccountStatusHandler(credential_store=..., session_manager=...,
                                       audit_log=..., logger=...)
        result = await handler.approve(user_id, actor_id=admin.id)
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        session_manager: SessionManager,
        audit_log: AuditLog,
        logger: LoggerProtocol,
    ) -> None:
        self._credential_store = credential_store
        self._session_manager = session_manager
        self._audit_log = audit_log
        self._logger = logger

    async def approve(
        self, user_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Result[UserView, IdentityError]:
        return await self.handle(
            ChangeAccountStatus(
                user_id=user_id,
                target=AccountStatus.ACTIVE,
                actor_id=actor_id,
                reason=reason,
            )
        )

    async def reject(
        self, user_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Result[UserView, IdentityError]:
        return await self.handle(
            ChangeAccountStatus(
                user_id=user_id,
                target=AccountStatus.REJECTED,
                actor_id=actor_id,
                reason=reason,
            )
        )

    async def suspend(
        self, user_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Result[UserView, IdentityError]:
        return await self.handle(
            ChangeAccountStatus(
                user_id=user_id,
                target=AccountStatus.SUSPENDED,
                actor_id=actor_id,
                reason=reason,
            )
        )

    async def soft_delete(
        self, user_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Result[UserView, IdentityError]:
        return await self.handle(
            ChangeAccountStatus(
                user_id=user_id,
                target=AccountStatus.INACTIVE,
                actor_id=actor_id,
                reason=reason,
            )
        )

    async def reactivate(
        self, user_id: UUID, actor_id: UUID, reason: str | None = None
    ) -> Result[UserView, IdentityError]:
        return await self.approve(user_id, actor_id, reason)

    async def handle(self, cmd: ChangeAccountStatus) -> Result[UserView, IdentityError]:
        """Apply a lifecycle transition.

        Returns:
            Success(UserView) with the new status, or Failure with
            USER_NOT_FOUND or INVALID_STATUS_TRANSITION.
        """
        user = await self._credential_store.get_user_by_id(cmd.user_id)
        if user is None:
            return Failure(error=IdentityError.of(ErrorCode.USER_NOT_FOUND))

        if cmd.actor_id == user.id and cmd.target is not AccountStatus.ACTIVE:
            return Failure(error=IdentityError.of(ErrorCode.INVALID_STATUS_TRANSITION))

        previous = user.status
        try:
            user.transition_to(cmd.target, actor_id=cmd.actor_id)
        except InvalidStatusTransition:
            return Failure(
                error=IdentityError.of(
                    ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"from": previous.value, "to": cmd.target.value},
                )
            )
        if not await self._credential_store.save_status_change(user, previous):
            return Failure(
                error=IdentityError.of(
                    ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"from": previous.value, "to": cmd.target.value},
                )
            )

        sessions_ended = 0
        if cmd.target in _SESSION_END_REASONS:
            sessions_ended = await self._session_manager.invalidate_all_sessions(
                user.id, _SESSION_END_REASONS[cmd.target]
            )

        details = {
            "from": previous.value,
            "to": cmd.target.value,
            "sessions_invalidated": str(sessions_ended),
        }
        if cmd.reason:
            details["reason"] = cmd.reason

        await self._audit_log.log_activity(
            user_id=cmd.actor_id,
            action=_activity_for(previous, cmd.target),
            resource_type="user",
            resource_id=str(user.id),
            details=details,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if cmd.target is AccountStatus.SUSPENDED:
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.USER_SUSPENDED,
                severity=SecuritySeverity.MEDIUM,
                description="User account suspended by administrator",
                user_id=user.id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                details={**details, "actor_id": str(cmd.actor_id)},
            )

        self._logger.info(
            "account_status_changed",
            user_id=str(user.id),
            actor_id=str(cmd.actor_id),
            status_from=previous.value,
            status_to=cmd.target.value,
        )
        return Success(value=UserView.from_user(user))


def _activity_for(previous: AccountStatus, target: AccountStatus) -> ActivityAction:
    match target:
        case AccountStatus.ACTIVE if previous in (
            AccountStatus.PENDING,
            AccountStatus.REJECTED,
        ):
            return ActivityAction.USER_APPROVED
        case AccountStatus.ACTIVE:
            return ActivityAction.USER_REACTIVATED
        case AccountStatus.REJECTED:
            return ActivityAction.USER_REJECTED
        case AccountStatus.SUSPENDED:
            return ActivityAction.USER_SUSPENDED
        case _:
            return ActivityAction.USER_DELETED
