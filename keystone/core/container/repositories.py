"""Repository dependency factories.

Repositories are stateless apart from the shared Database, so they are
application-scoped singletons.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from keystone.core.container.infrastructure import get_database

if TYPE_CHECKING:
    from keystone.domain.protocols import (
        LoginHistoryRepository,
        PasswordHistoryRepository,
        PasswordResetTokenRepository,
        SessionRepository,
        UserRepository,
    )


@lru_cache()
def get_user_repository() -> "UserRepository":
    from keystone.infrastructure.persistence.repositories import UserRepository

    return UserRepository(database=get_database())


@lru_cache()
def get_session_repository() -> "SessionRepository":
    from keystone.infrastructure.persistence.repositories import SessionRepository

    return SessionRepository(database=get_database())


@lru_cache()
def get_login_history_repository() -> "LoginHistoryRepository":
    from keystone.infrastructure.persistence.repositories import (
        LoginHistoryRepository,
    )

    return LoginHistoryRepository(database=get_database())


@lru_cache()
def get_password_history_repository() -> "PasswordHistoryRepository":
    from keystone.infrastructure.persistence.repositories import (
        PasswordHistoryRepository,
    )

    return PasswordHistoryRepository(database=get_database())


@lru_cache()
def get_password_reset_token_repository() -> "PasswordResetTokenRepository":
    from keystone.infrastructure.persistence.repositories import (
        PasswordResetTokenRepository,
    )

    return PasswordResetTokenRepository(database=get_database())
