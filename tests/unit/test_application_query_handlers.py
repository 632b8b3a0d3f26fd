"""Unit tests for query handlers.

Tests cover:
- ListSessionsHandler (current session marker, no token hashes)
- GetLoginHistoryHandler (ordering, page clamping)
- CheckSuspiciousActivityHandler
- ListSecurityEventsHandler and GetUserActivityHandler
- ListUsersByStatusHandler
"""

from dataclasses import fields
from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from keystone.application.dtos import SessionSummary
from keystone.application.queries import (
    CheckSuspiciousActivity,
    GetLoginHistory,
    GetUserActivity,
    ListSecurityEvents,
    ListUserSessions,
    ListUsersByStatus,
)
from keystone.application.queries.handlers.audit_query_handlers import (
    GetUserActivityHandler,
    ListSecurityEventsHandler,
)
from keystone.application.queries.handlers.check_suspicious_activity_handler import (
    CheckSuspiciousActivityHandler,
)
from keystone.application.queries.handlers.get_login_history_handler import (
    GetLoginHistoryHandler,
)
from keystone.application.queries.handlers.list_sessions_handler import (
    ListSessionsHandler,
)
from keystone.application.queries.handlers.list_users_handler import (
    ListUsersByStatusHandler,
)
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Success
from keystone.domain.entities import LoginHistoryEntry
from keystone.domain.enums import (
    AccountStatus,
    ActivityAction,
    SecurityEventType,
    SecuritySeverity,
)


@pytest.mark.unit
class TestListSessions:
    """Test ListSessionsHandler."""

    async def test_lists_active_sessions_only(self, identity):
        """Test ended sessions are excluded and the current one is marked."""
        user = await identity.add_user()
        current = await identity.session_manager.create_session(user)
        ended = await identity.session_manager.create_session(user)
        await identity.session_manager.invalidate_session(ended.session_id, "logout")
        handler = ListSessionsHandler(identity.session_manager)

        result = await handler.handle(
            ListUserSessions(user_id=user.id, current_session_id=current.session_id)
        )

        assert isinstance(result, Success)
        assert result.value.total_count == 1
        assert result.value.sessions[0].id == current.session_id
        assert result.value.current_session_id == str(current.session_id)

    def test_summary_carries_no_token_hashes(self):
        """Test SessionSummary has no hash fields."""
        names = {f.name for f in fields(SessionSummary)}

        assert "token_hash" not in names
        assert "refresh_token_hash" not in names


@pytest.mark.unit
class TestGetLoginHistory:
    """Test GetLoginHistoryHandler."""

    async def _add(self, identity, user_id, ago):
        await identity.login_history.add(
            LoginHistoryEntry(
                id=uuid7(),
                user_id=user_id,
                success=True,
                ip_address="10.0.0.1",
                created_at=datetime.now(UTC) - ago,
            )
        )

    async def test_newest_first(self, identity):
        """Test entries come back newest first and only for the user."""
        user_id = uuid7()
        await self._add(identity, user_id, timedelta(hours=2))
        await self._add(identity, user_id, timedelta(minutes=1))
        await self._add(identity, uuid7(), timedelta(seconds=1))
        handler = GetLoginHistoryHandler(identity.login_history)

        result = await handler.handle(GetLoginHistory(user_id=user_id))

        entries = result.value
        assert len(entries) == 2
        assert entries[0].created_at > entries[1].created_at

    @pytest.mark.parametrize(("limit", "expected"), [(0, 1), (-5, 1), (500, 3)])
    async def test_limit_is_clamped(self, identity, limit, expected):
        """Test out-of-range page sizes are clamped."""
        user_id = uuid7()
        for minutes in range(3):
            await self._add(identity, user_id, timedelta(minutes=minutes))
        handler = GetLoginHistoryHandler(identity.login_history)

        result = await handler.handle(
            GetLoginHistory(user_id=user_id, limit=limit, offset=-1)
        )

        assert len(result.value) == expected


@pytest.mark.unit
class TestCheckSuspiciousActivity:
    """Test CheckSuspiciousActivityHandler."""

    async def test_returns_findings(self, identity):
        """Test a user never seen from the IP gets a NEW_IP_ADDRESS finding."""
        user = await identity.add_user()
        handler = CheckSuspiciousActivityHandler(identity.session_manager)

        result = await handler.handle(
            CheckSuspiciousActivity(user_id=user.id, ip_address="203.0.113.50")
        )

        assert isinstance(result, Success)
        assert [f.type for f in result.value] == [SecurityEventType.NEW_IP_ADDRESS]
        assert identity.audit.events == []


@pytest.mark.unit
class TestAuditQueries:
    """Test ListSecurityEventsHandler and GetUserActivityHandler."""

    async def test_filter_events_by_severity(self, identity):
        """Test only matching severities are returned, newest first."""
        for severity in (SecuritySeverity.LOW, SecuritySeverity.HIGH):
            await identity.audit_log.log_security_event(
                event_type=SecurityEventType.RATE_LIMIT_EXCEEDED,
                severity=severity,
                description=severity.value,
            )
        handler = ListSecurityEventsHandler(identity.audit_log)

        result = await handler.handle(
            ListSecurityEvents(severity=SecuritySeverity.HIGH)
        )

        assert isinstance(result, Success)
        assert [e.description for e in result.value] == ["high"]

    async def test_user_activity(self, identity):
        """Test the activity of one user is listed."""
        user_id = uuid7()
        for actor in (user_id, uuid7()):
            await identity.audit_log.log_activity(
                user_id=actor, action=ActivityAction.USER_LOGIN
            )
        await identity.audit_log.log_activity(
            user_id=user_id, action=ActivityAction.USER_LOGOUT
        )
        handler = GetUserActivityHandler(identity.audit_log)

        result = await handler.handle(GetUserActivity(user_id=user_id))

        assert [e.action for e in result.value] == [
            ActivityAction.USER_LOGOUT,
            ActivityAction.USER_LOGIN,
        ]

    @pytest.mark.parametrize(
        ("handler_cls", "query"),
        [
            (ListSecurityEventsHandler, ListSecurityEvents()),
            (GetUserActivityHandler, GetUserActivity()),
        ],
    )
    async def test_store_failure(self, identity, handler_cls, query):
        """Test read failures surface as AUDIT_RECORD_FAILED."""
        identity.audit.fail = True

        result = await handler_cls(identity.audit_log).handle(query)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.AUDIT_RECORD_FAILED


@pytest.mark.unit
class TestListUsersByStatus:
    """Test ListUsersByStatusHandler."""

    async def test_pending_queue(self, identity):
        """Test only accounts in the requested status are listed."""
        pending = await identity.add_user("pending@example.com", status=AccountStatus.PENDING)
        await identity.add_user("active@example.com")
        handler = ListUsersByStatusHandler(identity.users)

        result = await handler.handle(ListUsersByStatus())

        assert isinstance(result, Success)
        assert [u.id for u in result.value] == [pending.id]
        assert not hasattr(result.value[0], "password_hash")
