"""Request password reset handler.

Flow:
1. Look up user by email
2. Skip silently if unknown or not active
3. Skip silently if the user already asked MAX_REQUESTS_PER_HOUR times
4. Issue an opaque token, store only its SHA-256 hash
5. Email the raw token
6. Record activity and a low-severity security event
7. Return Success(PasswordResetRequested)

Every path returns the same message, so the response never reveals whether
an account exists. Failures after the lookup are logged and swallowed for
the same reason.
"""

from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7

from keystone.application.commands.password_commands import RequestPasswordReset
from keystone.application.dtos import PasswordResetRequested
from keystone.application.services import AuditLog, CredentialStore
from keystone.core.result import Result, Success
from keystone.domain.entities import PasswordResetToken, User
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError, IdentityMessage
from keystone.domain.protocols import (
    EmailServiceProtocol,
    LoggerProtocol,
    OpaqueTokenProtocol,
    PasswordResetTokenRepository,
)


class RequestPasswordResetHandler:
    """Handler for the RequestPasswordReset command.

    Security considerations:
    - Always returns the same success message (no user enumeration)
    - Rate limits requests (max 3 per hour per user)
    - Tokens expire after ``expire_minutes`` (default 60)
    """

    # Rate limiting: max 3 requests per hour
    MAX_REQUESTS_PER_HOUR = 3

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        reset_token_repo: PasswordResetTokenRepository,
        opaque_tokens: OpaqueTokenProtocol,
        email_service: EmailServiceProtocol,
        audit_log: AuditLog,
        logger: LoggerProtocol,
        expire_minutes: int = 60,
    ) -> None:
        """Initialize password reset request handler with dependencies.

        Args:
            credential_store: User lookup.
            reset_token_repo: Reset token persistence.
            opaque_tokens: Token generation and hashing.
            email_service: Outbound email.
            audit_log: Activity and security event trail.
            logger: Process logger.
            expire_minutes: Token lifetime.
        """
        self._credential_store = credential_store
        self._reset_token_repo = reset_token_repo
        self._opaque_tokens = opaque_tokens
        self._email_service = email_service
        self._audit_log = audit_log
        self._logger = logger
        self._expire_minutes = expire_minutes

    async def handle(
        self, cmd: RequestPasswordReset
    ) -> Result[PasswordResetRequested, IdentityError]:
        """Handle password reset request command.

        Returns:
            Always Success(PasswordResetRequested) with the same message.
        """
        response = Success(
            value=PasswordResetRequested(message=IdentityMessage.PASSWORD_RESET_REQUESTED)
        )
        if not cmd.email or not cmd.email.strip():
            return response

        try:
            user = await self._credential_store.get_user_by_email(cmd.email)
            if user is None or not user.is_active:
                self._logger.info("password_reset_skipped", reason="no_active_account")
                return response
            await self._issue(user, cmd)
        except Exception as e:  # noqa: BLE001 - response must not reveal anything
            self._logger.error("password_reset_request_failed", error=e)

        return response

    async def _issue(self, user: User, cmd: RequestPasswordReset) -> None:
        now = datetime.now(UTC)
        recent = await self._reset_token_repo.count_issued_since(
            user.id, now - timedelta(hours=1)
        )
        if recent >= self.MAX_REQUESTS_PER_HOUR:
            self._logger.warning(
                "password_reset_rate_limited", user_id=str(user.id), recent=recent
            )
            return

        raw_token, token_hash = self._opaque_tokens.generate_token()
        await self._reset_token_repo.save(
            PasswordResetToken(
                id=uuid7(),
                user_id=user.id,
                token_hash=token_hash,
                expires_at=now + timedelta(minutes=self._expire_minutes),
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                created_at=now,
            )
        )
        await self._email_service.send_password_reset_email(
            to_email=user.email,
            reset_token=raw_token,
            expires_minutes=self._expire_minutes,
        )

        await self._audit_log.log_activity(
            user_id=user.id,
            action=ActivityAction.PASSWORD_RESET_REQUESTED,
            resource_type="user",
            resource_id=str(user.id),
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        await self._audit_log.log_security_event(
            event_type=SecurityEventType.PASSWORD_RESET_REQUESTED,
            severity=SecuritySeverity.LOW,
            description="Password reset requested",
            user_id=user.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
