"""Login history query handler."""

from keystone.application.queries.session_queries import GetLoginHistory
from keystone.core.result import Result, Success
from keystone.domain.entities import LoginHistoryEntry
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import LoginHistoryRepository

MAX_PAGE_SIZE = 200


class GetLoginHistoryHandler:
    """Handler for paging through a user's login attempts."""

    def __init__(self, login_history_repo: LoginHistoryRepository) -> None:
        self._login_history_repo = login_history_repo

    async def handle(
        self, query: GetLoginHistory
    ) -> Result[list[LoginHistoryEntry], IdentityError]:
        entries = await self._login_history_repo.list_for_user(
            query.user_id,
            limit=max(1, min(query.limit, MAX_PAGE_SIZE)),
            offset=max(0, query.offset),
        )
        return Success(value=entries)
