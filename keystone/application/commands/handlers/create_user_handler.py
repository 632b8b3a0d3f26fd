"""Create user handler (administrator-created accounts).

Delegates validation, hashing and persistence to CredentialStore. The new
account gets the requested role and initial status (ACTIVE by default).
"""

from keystone.application.commands.user_commands import CreateUser
from keystone.application.dtos import UserView
from keystone.application.services import CredentialStore, NewUserData
from keystone.core.result import Result
from keystone.domain.errors import IdentityError


class CreateUserHandler:
    """Handler for the CreateUser command."""

    def __init__(self, credential_store: CredentialStore) -> None:
        self._credential_store = credential_store

    async def handle(self, cmd: CreateUser) -> Result[UserView, IdentityError]:
        """Create the account.

        Returns:
            Success(UserView) or Failure with MISSING_REQUIRED_FIELDS,
            INVALID_EMAIL, WEAK_PASSWORD, EMAIL_ALREADY_EXISTS or
            INVALID_STATUS_TRANSITION.
        """
        return await self._credential_store.create_user(
            NewUserData(
                first_name=cmd.first_name,
                last_name=cmd.last_name,
                email=cmd.email,
                password=cmd.password,
                role=cmd.role,
                status=cmd.status,
            ),
            created_by=cmd.created_by,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
