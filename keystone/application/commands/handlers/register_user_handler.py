"""Register user handler (public sign-up).

Self-registered accounts are always role USER and status PENDING; they
cannot log in until an administrator approves them.
"""

from keystone.application.commands.user_commands import RegisterUser
from keystone.application.dtos import UserView
from keystone.application.services import CredentialStore, NewUserData
from keystone.core.result import Result
from keystone.domain.errors import IdentityError


class RegisterUserHandler:
    """Handler for the RegisterUser command."""

    def __init__(self, credential_store: CredentialStore) -> None:
        self._credential_store = credential_store

    async def handle(self, cmd: RegisterUser) -> Result[UserView, IdentityError]:
        return await self._credential_store.register_user(
            NewUserData(
                first_name=cmd.first_name,
                last_name=cmd.last_name,
                email=cmd.email,
                password=cmd.password,
            ),
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
