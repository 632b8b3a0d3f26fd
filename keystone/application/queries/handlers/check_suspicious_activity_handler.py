"""Suspicious activity query handler.

Advisory only: returns findings, never blocks or records anything.
"""

from keystone.application.queries.session_queries import CheckSuspiciousActivity
from keystone.application.services import SessionManager
from keystone.core.result import Result, Success
from keystone.domain.errors import IdentityError
from keystone.domain.value_objects import SuspiciousActivity


class CheckSuspiciousActivityHandler:
    """Handler for the CheckSuspiciousActivity query."""

    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def handle(
        self, query: CheckSuspiciousActivity
    ) -> Result[list[SuspiciousActivity], IdentityError]:
        findings = await self._session_manager.check_suspicious_activity(
            query.user_id, query.ip_address
        )
        return Success(value=findings)
