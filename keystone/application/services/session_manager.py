"""Session manager service.

Server-side sessions backed by a signed access token and an opaque refresh
token. Only SHA-256 hashes of both tokens are stored; the raw values are
returned once, at issue time.

Session lifecycle:
    created -> active -> (expired | invalidated)

An invalidated or expired session never validates again. Validation checks,
in order:
    1. Access token signature and claims (``sid`` must equal the session id)
    2. Stored token hash (constant-time comparison)
    3. Session active and unexpired
    4. Owning user still passes the login gate
"""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from keystone.application.dtos import IssuedSession, SessionValidated, UserView
from keystone.application.services.audit_log import AuditLog
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import Session, User
from keystone.domain.enums import ActivityAction, SecurityEventType, SecuritySeverity
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import (
    LoggerProtocol,
    LoginHistoryRepository,
    OpaqueTokenProtocol,
    SessionRepository,
    TokenGenerationProtocol,
    UserRepository,
)
from keystone.domain.value_objects import SuspiciousActivity

# Suspicious activity heuristics
FAILED_LOGIN_WINDOW = timedelta(hours=1)
FAILED_LOGIN_THRESHOLD = 3
KNOWN_IP_WINDOW = timedelta(days=30)
CONCURRENT_IP_THRESHOLD = 3


class SessionManager:
    """Issue, validate, refresh and invalidate sessions.

    Dependencies (injected via constructor):
        - SessionRepository: Session persistence
        - UserRepository: Owner lookups and activity stamps
        - LoginHistoryRepository: Source for suspicious-activity heuristics
        - TokenGenerationProtocol: Signed access tokens
        - OpaqueTokenProtocol: Refresh tokens and token hashing
        - AuditLog: Activity and security event trail
    """

    def __init__(
        self,
        *,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        login_history_repo: LoginHistoryRepository,
        token_service: TokenGenerationProtocol,
        opaque_tokens: OpaqueTokenProtocol,
        audit_log: AuditLog,
        logger: LoggerProtocol,
        session_timeout_hours: int = 24,
    ) -> None:
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._login_history_repo = login_history_repo
        self._token_service = token_service
        self._opaque_tokens = opaque_tokens
        self._audit_log = audit_log
        self._logger = logger
        self._session_timeout = timedelta(hours=session_timeout_hours)

    async def create_session(
        self,
        user: User,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
        device_info: dict[str, Any] | None = None,
    ) -> IssuedSession:
        """Open a session for an authenticated user.

        Also stamps the user's last login and records a ``user_login``
        activity entry.

        Returns:
            IssuedSession: Raw tokens. They are not stored and cannot be
            retrieved again.
        """
        session_id = uuid7()
        access_token = self._issue_access_token(user, session_id)
        refresh_token, refresh_hash = self._opaque_tokens.generate_token()
        now = datetime.now(UTC)

        session = Session(
            id=session_id,
            user_id=user.id,
            token_hash=self._opaque_tokens.hash_token(access_token),
            refresh_token_hash=refresh_hash,
            expires_at=now + self._session_timeout,
            ip_address=ip_address,
            user_agent=user_agent,
            device_info=device_info or {},
            last_activity_at=now,
            created_at=now,
        )
        await self._session_repo.save(session)

        user.record_login(ip_address, now)
        await self._user_repo.record_login(user.id, ip_address, now)

        await self._audit_log.log_activity(
            user_id=user.id,
            action=ActivityAction.USER_LOGIN,
            resource_type="session",
            resource_id=str(session.id),
            details={"device": device_info.get("summary", "") if device_info else ""},
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._logger.info(
            "session_created", user_id=str(user.id), session_id=str(session.id)
        )

        return IssuedSession(
            session_id=session.id,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=session.expires_at,
        )

    async def validate_session(
        self,
        session_id: UUID,
        raw_token: str,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[SessionValidated, IdentityError]:
        """Check that a presented token belongs to a live session.

        Returns:
            Success(SessionValidated) with the sanitized owner.
            Failure(USER_INACTIVE) if the owner can no longer log in; the
            session is invalidated as a side effect.
            Failure(INVALID_SESSION) for any other mismatch.
        """
        claims_result = self._token_service.validate_access_token(raw_token)
        if isinstance(claims_result, Failure):
            return _invalid_session()

        claims = claims_result.value
        if claims.get("sid") != str(session_id):
            return _invalid_session()

        session = await self._session_repo.find_by_id(session_id)
        if session is None:
            return _invalid_session()

        presented_hash = self._opaque_tokens.hash_token(raw_token)
        if not hmac.compare_digest(presented_hash, session.token_hash):
            return _invalid_session()

        if not session.is_valid() or claims.get("sub") != str(session.user_id):
            return _invalid_session()

        user = await self._user_repo.find_by_id(session.user_id)
        if user is None:
            await self._end_session(session.id, "user_not_found")
            return _invalid_session()

        denial = user.login_denial()
        if denial is not None:
            await self._end_session(session.id, "user_inactive")
            await self._audit_log.log_security_event(
                event_type=SecurityEventType.SESSION_INVALIDATED_USER_INACTIVE,
                severity=SecuritySeverity.MEDIUM,
                description="Session invalidated because its user can no longer log in",
                user_id=user.id,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"session_id": str(session.id), "reason": denial.value},
            )
            return Failure(error=IdentityError.of(ErrorCode.USER_INACTIVE))

        # Only a still-live session may be stamped; a concurrent logout wins.
        now = datetime.now(UTC)
        if not await self._session_repo.touch(session.id, now):
            return _invalid_session()
        user.last_activity_at = now
        await self._user_repo.touch_activity(user.id, now)

        return Success(
            value=SessionValidated(user=UserView.from_user(user), session_id=session.id)
        )

    async def refresh_session(
        self,
        session_id: UUID,
        refresh_token: str,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[IssuedSession, IdentityError]:
        """Rotate both tokens of a live session.

        The previous access and refresh tokens stop working immediately.
        The session keeps its original expiry.
        """
        session = await self._session_repo.find_by_id(session_id)
        if session is None or not session.is_valid():
            return _invalid_session()

        if not self._opaque_tokens.verify_token(refresh_token, session.refresh_token_hash):
            self._logger.warning("refresh_token_mismatch", session_id=str(session.id))
            return _invalid_session()

        user = await self._user_repo.find_by_id(session.user_id)
        if user is None:
            await self._end_session(session.id, "user_not_found")
            return _invalid_session()
        if not user.can_login():
            await self._end_session(session.id, "user_inactive")
            return Failure(error=IdentityError.of(ErrorCode.USER_INACTIVE))

        access_token = self._issue_access_token(user, session.id)
        new_refresh, new_refresh_hash = self._opaque_tokens.generate_token()
        rotated = await self._session_repo.rotate_tokens(
            session.id,
            expected_refresh_hash=session.refresh_token_hash,
            token_hash=self._opaque_tokens.hash_token(access_token),
            refresh_token_hash=new_refresh_hash,
            at=datetime.now(UTC),
        )
        if not rotated:
            self._logger.warning("refresh_conflict", session_id=str(session.id))
            return _invalid_session()

        await self._audit_log.log_activity(
            user_id=user.id,
            action=ActivityAction.SESSION_REFRESHED,
            resource_type="session",
            resource_id=str(session.id),
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return Success(
            value=IssuedSession(
                session_id=session.id,
                access_token=access_token,
                refresh_token=new_refresh,
                expires_at=session.expires_at,
            )
        )

    async def invalidate_session(self, session_id: UUID, reason: str) -> bool:
        """End one session. Idempotent.

        Returns:
            bool: True if this call ended the session, False if it was
            already inactive or does not exist.
        """
        return await self._end_session(session_id, reason)

    async def invalidate_all_sessions(
        self,
        user_id: UUID,
        reason: str,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        """End every active session of a user.

        Args:
            user_id: Owner.
            reason: Recorded on each session.
            except_session_id: Session to keep (the caller's own).

        Returns:
            int: Number of sessions invalidated.
        """
        count = await self._session_repo.invalidate_all_for_user(
            user_id, reason, except_session_id=except_session_id
        )
        self._logger.info(
            "sessions_invalidated", user_id=str(user_id), count=count, reason=reason
        )
        return count

    async def list_active_sessions(self, user_id: UUID) -> list[Session]:
        return await self._session_repo.find_by_user_id(user_id, active_only=True)

    async def find_session(self, session_id: UUID) -> Session | None:
        return await self._session_repo.find_by_id(session_id)

    async def check_suspicious_activity(
        self, user_id: UUID, ip_address: str | None
    ) -> list[SuspiciousActivity]:
        """Advisory heuristics for a login. Never blocks and never raises.

        Flags:
            - MULTIPLE_FAILED_LOGINS (medium): 3+ failures in the last hour
            - NEW_IP_ADDRESS (low): no successful login from this IP in 30 days
            - MULTIPLE_CONCURRENT_SESSIONS (medium): active sessions from
              more than 3 distinct IPs

        Returns:
            list[SuspiciousActivity]: Empty if nothing stands out or a
            lookup failed.
        """
        now = datetime.now(UTC)
        findings: list[SuspiciousActivity] = []
        try:
            failures = await self._login_history_repo.count_failures_since(
                user_id, now - FAILED_LOGIN_WINDOW
            )
            if failures >= FAILED_LOGIN_THRESHOLD:
                findings.append(
                    SuspiciousActivity(
                        type=SecurityEventType.MULTIPLE_FAILED_LOGINS,
                        severity=SecuritySeverity.MEDIUM,
                        description=f"{failures} failed login attempts in the last hour",
                    )
                )

            if ip_address and not await self._login_history_repo.has_success_from_ip(
                user_id, ip_address, now - KNOWN_IP_WINDOW
            ):
                findings.append(
                    SuspiciousActivity(
                        type=SecurityEventType.NEW_IP_ADDRESS,
                        severity=SecuritySeverity.LOW,
                        description="Login from a new IP address",
                    )
                )

            sessions = await self._session_repo.find_by_user_id(user_id, active_only=True)
            distinct_ips = {s.ip_address for s in sessions if s.ip_address}
            if len(distinct_ips) > CONCURRENT_IP_THRESHOLD:
                findings.append(
                    SuspiciousActivity(
                        type=SecurityEventType.MULTIPLE_CONCURRENT_SESSIONS,
                        severity=SecuritySeverity.MEDIUM,
                        description=(
                            f"Active sessions from {len(distinct_ips)} different IP addresses"
                        ),
                    )
                )
        except Exception as e:  # noqa: BLE001 - heuristics are advisory
            self._logger.warning(
                "suspicious_activity_check_failed",
                user_id=str(user_id),
                error_type=type(e).__name__,
            )
            return []

        return findings

    def _issue_access_token(self, user: User, session_id: UUID) -> str:
        return self._token_service.generate_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            session_id=session_id,
        )

    async def _end_session(self, session_id: UUID, reason: str) -> bool:
        if not await self._session_repo.invalidate(session_id, reason, datetime.now(UTC)):
            return False
        self._logger.info("session_invalidated", session_id=str(session_id), reason=reason)
        return True


def _invalid_session() -> Failure[IdentityError]:
    return Failure(error=IdentityError.of(ErrorCode.INVALID_SESSION))
