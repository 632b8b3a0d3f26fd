"""Authenticate user handler.

Verifies credentials and, on success, opens a session.

Flow:
1. Reject empty email or password (MISSING_CREDENTIALS)
2. Check per-IP rate limit (RATE_LIMITED)
3. Find user by email; unknown email counts against the IP
   (INVALID_CREDENTIALS, same wording as a wrong password)
4. Check per-user rate limit (ACCOUNT_LOCKED)
5. Check login gate: lock, then status, then active flag
6. Verify password; on mismatch count the failure against the IP, the
   user limiter and the durable lock (INVALID_CREDENTIALS)
7. Clear counters, run suspicious-activity heuristics, create the session
8. Return Success(AuthenticationSucceeded)

Every attempt that reaches a known user is written to login history.
Infrastructure exceptions anywhere in the flow are logged as critical,
recorded as a critical security event and returned as SYSTEM_ERROR with no
internal detail.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (adapters are injected via protocols)
"""

from typing import Any

from uuid_extensions import uuid7

from keystone.application.commands.auth_commands import AuthenticateUser
from keystone.application.dtos import AuthenticationSucceeded, UserView
from keystone.application.services import (
    AuditLog,
    CredentialStore,
    PasswordPolicy,
    SessionManager,
)
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import LoginHistoryEntry, User
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import (
    DeviceEnricherProtocol,
    LoggerProtocol,
    LoginHistoryRepository,
    RateLimiterProtocol,
    ip_identifier,
    user_identifier,
)

# Login gate denials that are recorded as security events
_DENIAL_EVENTS: dict[ErrorCode, tuple[SecurityEventType, SecuritySeverity, str]] = {
    ErrorCode.ACCOUNT_LOCKED: (
        SecurityEventType.LOGIN_ATTEMPT_LOCKED_ACCOUNT,
        SecuritySeverity.MEDIUM,
        "Login attempt on locked account",
    ),
    ErrorCode.ACCOUNT_SUSPENDED: (
        SecurityEventType.LOGIN_ATTEMPT_SUSPENDED_ACCOUNT,
        SecuritySeverity.MEDIUM,
        "Login attempt on suspended account",
    ),
    ErrorCode.ACCOUNT_INACTIVE: (
        SecurityEventType.LOGIN_ATTEMPT_INACTIVE_ACCOUNT,
        SecuritySeverity.LOW,
        "Login attempt on inactive account",
    ),
}


class AuthenticateUserHandler:
    """Handler for the AuthenticateUser command.

    Dependencies (injected via constructor):
        - CredentialStore: User lookup and durable lock bookkeeping
        - PasswordPolicy: Non-blocking password verification
        - SessionManager: Session issue and suspicious-activity heuristics
        - RateLimiterProtocol: Fast per-IP and per-user throttle
        - LoginHistoryRepository: Per-attempt history
        - DeviceEnricherProtocol: User agent parsing
        - AuditLog: Activity and security event trail
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        password_policy: PasswordPolicy,
        session_manager: SessionManager,
        rate_limiter: RateLimiterProtocol,
        login_history_repo: LoginHistoryRepository,
        device_enricher: DeviceEnricherProtocol,
        audit_log: AuditLog,
        logger: LoggerProtocol,
        ip_max_login_attempts: int = 20,
    ) -> None:
        self._credential_store = credential_store
        self._password_policy = password_policy
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter
        self._login_history_repo = login_history_repo
        self._device_enricher = device_enricher
        self._audit_log = audit_log
        self._logger = logger
        self._ip_max_login_attempts = ip_max_login_attempts

    async def handle(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticationSucceeded, IdentityError]:
        """Handle the AuthenticateUser command.

        Args:
            cmd: Credentials plus client metadata.

        Returns:
            Success(AuthenticationSucceeded) with the sanitized user and the
            freshly issued session.
            Failure(IdentityError) with MISSING_CREDENTIALS, RATE_LIMITED,
            INVALID_CREDENTIALS, ACCOUNT_LOCKED, ACCOUNT_PENDING,
            ACCOUNT_REJECTED, ACCOUNT_SUSPENDED, ACCOUNT_INACTIVE,
            ACCOUNT_NOT_ACTIVE or SYSTEM_ERROR.
        """
        if not cmd.email or not cmd.email.strip() or not cmd.password:
            return _fail(ErrorCode.MISSING_CREDENTIALS)

        try:
            return await self._authenticate(cmd)
        except Exception as e:  # noqa: BLE001 - never leak infrastructure detail
            self._logger.critical(
                "authentication_system_error", error=e, ip_address=cmd.ip_address
            )
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.AUTHENTICATION_SYSTEM_ERROR,
                severity=SecuritySeverity.CRITICAL,
                description="Authentication failed due to an internal error",
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                details={"error_type": type(e).__name__},
            )
            return _fail(ErrorCode.SYSTEM_ERROR)

    async def _authenticate(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticationSucceeded, IdentityError]:
        email = cmd.email.strip().lower()
        ip_key = ip_identifier(cmd.ip_address)

        # Step 2: per-IP throttle
        if await self._rate_limiter.is_rate_limited(
            ip_key, self._ip_max_login_attempts
        ):
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.RATE_LIMIT_EXCEEDED,
                severity=SecuritySeverity.MEDIUM,
                description="Login rate limit exceeded for IP address",
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                details={"email": email},
            )
            return _fail(ErrorCode.RATE_LIMITED)

        # Step 3: lookup
        user = await self._credential_store.get_user_by_email(email)
        if user is None:
            await self._rate_limiter.record_failed_attempt(ip_key)
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.LOGIN_FAILED_USER_NOT_FOUND,
                severity=SecuritySeverity.LOW,
                description="Login attempt for unknown email",
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                details={"email": email},
            )
            return _fail(ErrorCode.INVALID_CREDENTIALS)

        device_info = self._device_info(cmd)
        user_key = user_identifier(user.id)

        # Step 4: per-user throttle
        if await self._rate_limiter.is_rate_limited(user_key):
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.USER_RATE_LIMIT_EXCEEDED,
                severity=SecuritySeverity.MEDIUM,
                description="Login rate limit exceeded for user",
                user_id=user.id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
            )
            await self._record_attempt(
                user, cmd, device_info, failure=ErrorCode.ACCOUNT_LOCKED
            )
            return _fail(ErrorCode.ACCOUNT_LOCKED)

        # Step 5: login gate
        denial = user.login_denial()
        if denial is not None:
            if denial in _DENIAL_EVENTS:
                event_type, severity, description = _DENIAL_EVENTS[denial]
                await self._audit_log.log_security_event(
                    event_type=event_type,
                    severity=severity,
                    description=description,
                    user_id=user.id,
                    ip_address=cmd.ip_address,
                    user_agent=cmd.user_agent,
                    details={"status": user.status.value},
                )
            await self._record_attempt(user, cmd, device_info, failure=denial)
            return _fail(denial)

        # Step 6: password
        if not await self._password_policy.verify_password(
            cmd.password, user.password_hash, user.password_salt
        ):
            await self._rate_limiter.record_failed_attempt(ip_key)
            await self._rate_limiter.record_failed_attempt(user_key)
            await self._credential_store.record_failed_password_attempt(
                user, ip_address=cmd.ip_address, user_agent=cmd.user_agent
            )
            await self._record_attempt(
                user, cmd, device_info, failure=ErrorCode.INVALID_CREDENTIALS
            )
            await self._audit_log.log_activity(
                user_id=user.id,
                action=ActivityAction.LOGIN_FAILED,
                resource_type="user",
                resource_id=str(user.id),
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                success=False,
                error_message=ErrorCode.INVALID_CREDENTIALS.value,
            )
            return _fail(ErrorCode.INVALID_CREDENTIALS)

        # Step 7: success
        await self._credential_store.reset_failure_counters(user)
        await self._rate_limiter.reset(ip_key)
        await self._rate_limiter.reset(user_key)

        findings = await self._session_manager.check_suspicious_activity(
            user.id, cmd.ip_address
        )
        issued = await self._session_manager.create_session(
            user,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            device_info=device_info,
        )
        await self._record_attempt(user, cmd, device_info, failure=None)

        for finding in findings:
            await self._audit_log.log_security_event(
                event_type=finding.type,
                severity=finding.severity,
                description=finding.description,
                user_id=user.id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                details={"session_id": str(issued.session_id)},
            )

        return Success(
            value=AuthenticationSucceeded(user=UserView.from_user(user), session=issued)
        )

    def _device_info(self, cmd: AuthenticateUser) -> dict[str, Any]:
        if cmd.device_info:
            return dict(cmd.device_info)
        return self._device_enricher.enrich(cmd.user_agent).as_dict()

    async def _record_attempt(
        self,
        user: User,
        cmd: AuthenticateUser,
        device_info: dict[str, Any],
        *,
        failure: ErrorCode | None,
    ) -> None:
        await self._login_history_repo.add(
            LoginHistoryEntry(
                id=uuid7(),
                user_id=user.id,
                success=failure is None,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
                device_type=device_info.get("device_type"),
                browser=device_info.get("browser"),
                failure_reason=failure.value if failure else None,
            )
        )


def _fail(code: ErrorCode) -> Failure[IdentityError]:
    return Failure(error=IdentityError.of(code))
