"""Bootstrap administrator handler.

Runs at startup. Creates the administrator account from ADMIN_EMAIL and
ADMIN_PASSWORD when no account with that email exists. Existing accounts
are never modified, and nothing happens when ADMIN_PASSWORD is unset.
"""

from keystone.application.dtos import UserView
from keystone.application.services import CredentialStore, NewUserData
from keystone.core.result import Failure
from keystone.domain.enums import AccountStatus, UserRole
from keystone.domain.protocols import LoggerProtocol


class EnsureBootstrapAdminHandler:
    """Create the bootstrap administrator if missing.

    Usage:
        handler = EnsureBootstrapAdminHandler(
            credential_store=store,
            logger=logger,
            admin_email=settings.admin_email,
            admin_password=settings.admin_password,
        )
        await handler.handle()
    """

    def __init__(
        self,
        *,
        credential_store: CredentialStore,
        logger: LoggerProtocol,
        admin_email: str,
        admin_password: str | None,
    ) -> None:
        self._credential_store = credential_store
        self._logger = logger
        self._admin_email = admin_email
        self._admin_password = admin_password

    async def handle(self) -> UserView | None:
        """Ensure the administrator exists.

        Returns:
            UserView of the newly created administrator, or None if it already
            existed, no password is configured, or creation was rejected.
        """
        if not self._admin_password:
            self._logger.info("bootstrap_admin_skipped", reason="no_password_configured")
            return None

        existing = await self._credential_store.get_user_by_email(self._admin_email)
        if existing is not None:
            self._logger.debug("bootstrap_admin_exists", user_id=str(existing.id))
            return None

        result = await self._credential_store.create_user(
            NewUserData(
                first_name="System",
                last_name="Administrator",
                email=self._admin_email,
                password=self._admin_password,
                role=UserRole.ADMIN,
                status=AccountStatus.ACTIVE,
            )
        )
        if isinstance(result, Failure):
            self._logger.error(
                "bootstrap_admin_rejected",
                error_code=result.error.code.value,
                error_message=result.error.message,
            )
            return None

        self._logger.info("bootstrap_admin_created", user_id=str(result.value.id))
        return result.value
