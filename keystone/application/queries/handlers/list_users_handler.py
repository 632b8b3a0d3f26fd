"""List users by status query handler (e.g. the approval queue)."""

from keystone.application.dtos import UserView
from keystone.application.queries.user_queries import ListUsersByStatus
from keystone.core.result import Result, Success
from keystone.domain.errors import IdentityError
from keystone.domain.protocols import UserRepository


class ListUsersByStatusHandler:
    """Handler for the ListUsersByStatus query."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(
        self, query: ListUsersByStatus
    ) -> Result[list[UserView], IdentityError]:
        users = await self._user_repo.list_by_status(
            query.status, limit=query.limit, offset=query.offset
        )
        return Success(value=[UserView.from_user(user) for user in users])
