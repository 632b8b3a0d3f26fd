"""In-memory implementations of the identity ports for tests.

Each fake satisfies its protocol structurally and keeps state in plain
lists and dicts so tests can inspect what was written.
"""

import hashlib
import secrets
from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Result, Success
from keystone.domain.entities import (
    ActivityLogEntry,
    LoginHistoryEntry,
    PasswordHistoryEntry,
    PasswordResetToken,
    SecurityEvent,
    Session,
    User,
)
from keystone.domain.enums import AccountStatus, SecuritySeverity
from keystone.domain.errors import AuditError
from keystone.domain.protocols import HashedPassword


class FastHasher:
    """Deterministic SHA-256 hasher standing in for bcrypt.

    Keeps the (hash, salt) contract of BcryptPasswordService: the hash
    starts with its salt and a fresh salt is drawn per call.
    """

    def __init__(self) -> None:
        self.hash_calls = 0
        self.verify_calls = 0

    def hash_password(self, password: str) -> HashedPassword:
        self.hash_calls += 1
        salt = secrets.token_hex(8)
        digest = hashlib.sha256(f"{salt}{password}".encode()).hexdigest()
        return HashedPassword(hash=f"{salt}${digest}", salt=salt)

    def verify_password(self, password: str, password_hash: str, salt: str) -> bool:
        self.verify_calls += 1
        digest = hashlib.sha256(f"{salt}{password}".encode()).hexdigest()
        return password_hash == f"{salt}${digest}"


class RecordingLogger:
    """LoggerProtocol implementation that keeps every call."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _log(self, level: str, message: str, context: dict[str, Any]) -> None:
        self.records.append((level, message, context))

    def debug(self, message: str, /, **context: Any) -> None:
        self._log("debug", message, context)

    def info(self, message: str, /, **context: Any) -> None:
        self._log("info", message, context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._log("warning", message, context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._log("error", message, {**context, "error": error})

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._log("critical", message, {**context, "error": error})

    def bind(self, **context: Any) -> "RecordingLogger":
        return self

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


class InMemoryUserRepository:
    """Rows live in ``users``; reads hand out copies like a real store.

    Writes change only the fields they own on the stored row, so a stale
    copy held by a caller never overwrites a concurrent change.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    async def find_by_id(self, user_id: UUID) -> User | None:
        stored = self.users.get(user_id)
        return replace(stored) if stored else None

    async def find_by_email(self, email: str) -> User | None:
        email = email.lower()
        stored = next((u for u in self.users.values() if u.email == email), None)
        return replace(stored) if stored else None

    async def exists_by_email(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def save(self, user: User) -> None:
        self.users[user.id] = replace(user)

    async def update_status(self, user: User, *, expected: AccountStatus) -> bool:
        stored = self.users.get(user.id)
        if stored is None or stored.status is not expected:
            return False
        stored.status = user.status
        stored.is_active = user.is_active
        stored.email_verified = user.email_verified
        stored.updated_by = user.updated_by
        stored.updated_at = user.updated_at
        return True

    async def update_password(self, user: User) -> None:
        stored = self.users[user.id]
        stored.password_hash = user.password_hash
        stored.password_salt = user.password_salt
        stored.password_changed_at = user.password_changed_at
        stored.updated_by = user.updated_by
        stored.updated_at = user.updated_at

    async def record_login(
        self, user_id: UUID, ip_address: str | None, at: datetime
    ) -> None:
        self.users[user_id].record_login(ip_address, at)

    async def touch_activity(self, user_id: UUID, at: datetime) -> None:
        self.users[user_id].last_activity_at = at

    async def increment_failed_logins(
        self,
        user_id: UUID,
        *,
        max_attempts: int,
        lock_until: datetime,
        now: datetime,
    ) -> tuple[int, datetime | None]:
        stored = self.users.get(user_id)
        if stored is None:
            return 0, None
        lock_expired = stored.locked_until is not None and stored.locked_until <= now
        attempts = 1 if lock_expired else stored.failed_login_attempts + 1
        if stored.locked_until is not None and stored.locked_until > now:
            locked_until = stored.locked_until
        elif attempts >= max_attempts:
            locked_until = lock_until
        else:
            locked_until = None
        stored.failed_login_attempts = attempts
        stored.locked_until = locked_until
        stored.updated_at = now
        return attempts, locked_until

    async def reset_failed_logins(self, user_id: UUID) -> None:
        stored = self.users[user_id]
        stored.failed_login_attempts = 0
        stored.locked_until = None

    async def delete(self, user_id: UUID) -> bool:
        return self.users.pop(user_id, None) is not None

    async def list_by_status(
        self, status: AccountStatus, *, limit: int = 50, offset: int = 0
    ) -> list[User]:
        matching = sorted(
            (u for u in self.users.values() if u.status is status),
            key=lambda u: u.created_at,
        )
        return [replace(u) for u in matching[offset : offset + limit]]


class InMemorySessionRepository:
    def __init__(self) -> None:
        self.sessions: dict[UUID, Session] = {}

    @staticmethod
    def _copy(session: Session) -> Session:
        return replace(session, device_info=dict(session.device_info))

    @staticmethod
    def _is_live(session: Session | None, at: datetime) -> bool:
        return session is not None and session.is_active and session.expires_at > at

    async def save(self, session: Session) -> None:
        self.sessions[session.id] = self._copy(session)

    async def touch(self, session_id: UUID, at: datetime) -> bool:
        stored = self.sessions.get(session_id)
        if not self._is_live(stored, at):
            return False
        stored.last_activity_at = at
        return True

    async def rotate_tokens(
        self,
        session_id: UUID,
        *,
        expected_refresh_hash: str,
        token_hash: str,
        refresh_token_hash: str,
        at: datetime,
    ) -> bool:
        stored = self.sessions.get(session_id)
        if not self._is_live(stored, at):
            return False
        if stored.refresh_token_hash != expected_refresh_hash:
            return False
        stored.rotate_tokens(token_hash, refresh_token_hash)
        stored.last_activity_at = at
        return True

    async def invalidate(self, session_id: UUID, reason: str, at: datetime) -> bool:
        stored = self.sessions.get(session_id)
        if stored is None or not stored.invalidate(reason):
            return False
        stored.invalidated_at = at
        return True

    async def find_by_id(self, session_id: UUID) -> Session | None:
        stored = self.sessions.get(session_id)
        return self._copy(stored) if stored else None

    async def find_by_user_id(
        self, user_id: UUID, *, active_only: bool = False
    ) -> list[Session]:
        owned = [s for s in self.sessions.values() if s.user_id == user_id]
        if active_only:
            owned = [s for s in owned if s.is_valid()]
        owned.sort(key=lambda s: s.created_at, reverse=True)
        return [self._copy(s) for s in owned]

    async def invalidate_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        count = 0
        for session in self.sessions.values():
            if session.user_id != user_id or session.id == except_session_id:
                continue
            if session.invalidate(reason):
                count += 1
        return count


class InMemoryLoginHistoryRepository:
    def __init__(self) -> None:
        self.entries: list[LoginHistoryEntry] = []

    async def add(self, entry: LoginHistoryEntry) -> None:
        self.entries.append(entry)

    async def list_for_user(
        self, user_id: UUID, *, limit: int = 50, offset: int = 0
    ) -> list[LoginHistoryEntry]:
        owned = sorted(
            (e for e in self.entries if e.user_id == user_id),
            key=lambda e: e.created_at,
            reverse=True,
        )
        return owned[offset : offset + limit]

    async def count_failures_since(self, user_id: UUID, since: datetime) -> int:
        return sum(
            1
            for e in self.entries
            if e.user_id == user_id and not e.success and e.created_at >= since
        )

    async def has_success_from_ip(
        self,
        user_id: UUID,
        ip_address: str,
        since: datetime,
        *,
        before: datetime | None = None,
    ) -> bool:
        return any(
            e.user_id == user_id
            and e.success
            and e.ip_address == ip_address
            and e.created_at >= since
            and (before is None or e.created_at < before)
            for e in self.entries
        )


class InMemoryPasswordHistoryRepository:
    def __init__(self) -> None:
        self.entries: list[PasswordHistoryEntry] = []

    async def add(self, entry: PasswordHistoryEntry) -> None:
        self.entries.append(entry)

    async def list_recent(self, user_id: UUID, limit: int) -> list[PasswordHistoryEntry]:
        owned = [e for e in self.entries if e.user_id == user_id]
        return list(reversed(owned))[:limit]


class InMemoryPasswordResetTokenRepository:
    def __init__(self) -> None:
        self.tokens: dict[UUID, PasswordResetToken] = {}

    async def save(self, token: PasswordResetToken) -> None:
        self.tokens[token.id] = replace(token)

    async def mark_used(self, token_id: UUID, at: datetime) -> bool:
        stored = self.tokens.get(token_id)
        if stored is None or stored.used_at is not None:
            return False
        stored.mark_used(at)
        return True

    async def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        stored = next(
            (t for t in self.tokens.values() if t.token_hash == token_hash), None
        )
        return replace(stored) if stored else None

    async def count_issued_since(self, user_id: UUID, since: datetime) -> int:
        return sum(
            1
            for t in self.tokens.values()
            if t.user_id == user_id and t.created_at >= since
        )


class InMemoryAudit:
    """AuditProtocol fake. ``fail`` makes every call return Failure."""

    def __init__(self) -> None:
        self.activity: list[ActivityLogEntry] = []
        self.events: list[SecurityEvent] = []
        self.fail = False

    def _failure(self) -> Failure[AuditError]:
        return Failure(
            error=AuditError(
                code=ErrorCode.AUDIT_RECORD_FAILED, message="audit store unavailable"
            )
        )

    async def record_activity(self, entry: ActivityLogEntry) -> Result[None, AuditError]:
        if self.fail:
            return self._failure()
        self.activity.append(entry)
        return Success(value=None)

    async def record_security_event(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        if self.fail:
            return self._failure()
        self.events.append(replace(event))
        return Success(value=None)

    async def query_activity(
        self, *, user_id: UUID | None = None, limit: int = 50, offset: int = 0
    ) -> Result[list[ActivityLogEntry], AuditError]:
        if self.fail:
            return self._failure()
        rows = [e for e in reversed(self.activity) if user_id is None or e.user_id == user_id]
        return Success(value=rows[offset : offset + limit])

    async def query_security_events(
        self,
        *,
        user_id: UUID | None = None,
        severity: SecuritySeverity | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[SecurityEvent], AuditError]:
        if self.fail:
            return self._failure()
        rows = [
            e
            for e in reversed(self.events)
            if (user_id is None or e.user_id == user_id)
            and (severity is None or e.severity is severity)
        ]
        return Success(value=rows[offset : offset + limit])

    async def find_security_event(
        self, event_id: UUID
    ) -> Result[SecurityEvent | None, AuditError]:
        if self.fail:
            return self._failure()
        return Success(value=next((e for e in self.events if e.id == event_id), None))

    async def mark_security_event_resolved(
        self, event: SecurityEvent
    ) -> Result[None, AuditError]:
        if self.fail:
            return self._failure()
        for stored in self.events:
            if stored.id == event.id:
                stored.resolved_at = event.resolved_at
                stored.resolved_by = event.resolved_by
        return Success(value=None)

    def event_types(self) -> list[str]:
        return [e.event_type.value for e in self.events]

    def actions(self) -> list[str]:
        return [e.action.value for e in self.activity]


class RecordingEmailService:
    def __init__(self) -> None:
        self.reset_emails: list[tuple[str, str, int]] = []
        self.changed_notifications: list[str] = []
        self.fail = False

    async def send_password_reset_email(
        self, to_email: str, reset_token: str, expires_minutes: int
    ) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.reset_emails.append((to_email, reset_token, expires_minutes))

    async def send_password_changed_notification(self, to_email: str) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.changed_notifications.append(to_email)
