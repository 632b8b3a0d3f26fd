"""SQLAlchemy repository adapters."""

from keystone.infrastructure.persistence.repositories.login_history_repository import (
    LoginHistoryRepository,
)
from keystone.infrastructure.persistence.repositories.password_history_repository import (
    PasswordHistoryRepository,
)
from keystone.infrastructure.persistence.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from keystone.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from keystone.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "LoginHistoryRepository",
    "PasswordHistoryRepository",
    "PasswordResetTokenRepository",
    "SessionRepository",
    "UserRepository",
]
