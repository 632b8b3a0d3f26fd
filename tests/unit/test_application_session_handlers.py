"""Unit tests for session command handlers.

Tests cover:
- LogoutUserHandler (ownership, idempotency)
- LogoutAllSessionsHandler
- ValidateSessionHandler and RefreshSessionHandler boundaries
"""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from keystone.application.commands import (
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
    ValidateSession,
)
from keystone.application.commands.handlers.logout_all_sessions_handler import (
    LogoutAllSessionsHandler,
)
from keystone.application.commands.handlers.logout_user_handler import (
    LogoutUserHandler,
)
from keystone.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)
from keystone.application.commands.handlers.validate_session_handler import (
    ValidateSessionHandler,
)
from keystone.core.enums import ErrorCode
from keystone.core.result import Failure, Success
from keystone.domain.enums import ActivityAction, SecurityEventType


@pytest.mark.unit
class TestLogoutUser:
    """Test LogoutUserHandler."""

    async def test_logout_ends_own_session(self, identity):
        """Test the owner can end their session."""
        user = await identity.add_user()
        issued = await identity.session_manager.create_session(user)
        handler = LogoutUserHandler(
            identity.session_manager, identity.audit_log, identity.logger
        )

        result = await handler.handle(
            LogoutUser(session_id=issued.session_id, user_id=user.id)
        )

        assert isinstance(result, Success)
        assert result.value.success is True
        assert identity.sessions.sessions[issued.session_id].invalidated_reason == (
            "logout"
        )
        assert identity.audit.actions()[-1] == ActivityAction.USER_LOGOUT.value

    async def test_other_users_session_is_untouched(self, identity):
        """Test a caller cannot end someone else's session."""
        owner = await identity.add_user()
        other = await identity.add_user("other@example.com")
        issued = await identity.session_manager.create_session(owner)
        handler = LogoutUserHandler(
            identity.session_manager, identity.audit_log, identity.logger
        )

        result = await handler.handle(
            LogoutUser(session_id=issued.session_id, user_id=other.id)
        )

        assert isinstance(result, Success)
        assert result.value.success is False
        assert identity.sessions.sessions[issued.session_id].is_active is True
        assert "logout_session_not_owned" in identity.logger.messages("warning")

    async def test_unknown_session(self, identity):
        """Test logging out of a missing session still succeeds."""
        handler = LogoutUserHandler(
            identity.session_manager, identity.audit_log, identity.logger
        )

        result = await handler.handle(LogoutUser(session_id=uuid7(), user_id=uuid7()))

        assert isinstance(result, Success)
        assert result.value.success is False


@pytest.mark.unit
class TestLogoutAllSessions:
    """Test LogoutAllSessionsHandler."""

    async def test_sign_out_everywhere_except_current(self, identity):
        """Test every other session ends and the event is recorded."""
        user = await identity.add_user()
        current = await identity.session_manager.create_session(user)
        for _ in range(2):
            await identity.session_manager.create_session(user)
        handler = LogoutAllSessionsHandler(identity.session_manager, identity.audit_log)

        result = await handler.handle(
            LogoutAllSessions(user_id=user.id, except_session_id=current.session_id)
        )

        assert isinstance(result, Success)
        assert result.value.count == 2
        remaining = await identity.session_manager.list_active_sessions(user.id)
        assert [s.id for s in remaining] == [current.session_id]
        assert SecurityEventType.ALL_SESSIONS_INVALIDATED.value in (
            identity.audit.event_types()
        )

    async def test_no_sessions(self, identity):
        """Test a user without sessions gets a zero count."""
        user = await identity.add_user()
        handler = LogoutAllSessionsHandler(identity.session_manager, identity.audit_log)

        result = await handler.handle(LogoutAllSessions(user_id=user.id))

        assert result.value.count == 0


@pytest.mark.unit
class TestValidateSessionHandler:
    """Test ValidateSessionHandler."""

    async def test_valid_token(self, identity):
        """Test a live session validates through the handler."""
        user = await identity.add_user()
        issued = await identity.session_manager.create_session(user)
        handler = ValidateSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(
            ValidateSession(session_id=issued.session_id, token=issued.access_token)
        )

        assert isinstance(result, Success)
        assert result.value.user.email == user.email

    async def test_empty_token(self, identity):
        """Test an empty token fails without a lookup."""
        handler = ValidateSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(ValidateSession(session_id=uuid7(), token=""))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_SESSION

    async def test_infrastructure_error_is_validation_error(self, identity):
        """Test an exception becomes VALIDATION_ERROR without detail."""
        user = await identity.add_user()
        issued = await identity.session_manager.create_session(user)
        identity.sessions.find_by_id = AsyncMock(side_effect=ConnectionError("db"))
        handler = ValidateSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(
            ValidateSession(session_id=issued.session_id, token=issued.access_token)
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.VALIDATION_ERROR
        assert result.error.details is None
        assert "session_validation_error" in identity.logger.messages("error")


@pytest.mark.unit
class TestRefreshSessionHandler:
    """Test RefreshSessionHandler."""

    async def test_refresh(self, identity):
        """Test a valid refresh token yields new credentials."""
        user = await identity.add_user()
        issued = await identity.session_manager.create_session(user)
        handler = RefreshSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(
            RefreshSession(
                session_id=issued.session_id, refresh_token=issued.refresh_token
            )
        )

        assert isinstance(result, Success)
        assert result.value.access_token != issued.access_token

    async def test_empty_refresh_token(self, identity):
        """Test an empty refresh token fails."""
        handler = RefreshSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(
            RefreshSession(session_id=uuid7(), refresh_token="")
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_SESSION

    async def test_infrastructure_error(self, identity):
        """Test an exception becomes VALIDATION_ERROR."""
        identity.sessions.find_by_id = AsyncMock(side_effect=ConnectionError("db"))
        handler = RefreshSessionHandler(identity.session_manager, identity.logger)

        result = await handler.handle(
            RefreshSession(session_id=uuid7(), refresh_token="anything")
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.VALIDATION_ERROR
        assert "session_refresh_error" in identity.logger.messages("error")
