"""List sessions query handler.

Returns a user's active sessions with the caller's own session marked.
Stored token hashes are never part of the result.
"""

from dataclasses import dataclass

from keystone.application.dtos import SessionSummary
from keystone.application.queries.session_queries import ListUserSessions
from keystone.application.services import SessionManager
from keystone.core.result import Result, Success
from keystone.domain.errors import IdentityError


@dataclass
class SessionListResult:
    """Session list query result."""

    sessions: list[SessionSummary]
    current_session_id: str | None
    total_count: int


class ListSessionsHandler:
    """Handler for listing a user's active sessions."""

    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def handle(
        self, query: ListUserSessions
    ) -> Result[SessionListResult, IdentityError]:
        sessions = await self._session_manager.list_active_sessions(query.user_id)
        items = [SessionSummary.from_session(session) for session in sessions]
        return Success(
            value=SessionListResult(
                sessions=items,
                current_session_id=str(query.current_session_id)
                if query.current_session_id
                else None,
                total_count=len(items),
            )
        )
