"""Commands - Write operations that change state.

Commands represent caller intent to perform an action. They are immutable
dataclasses with imperative names (AuthenticateUser, ChangePassword).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from keystone.application.commands.auth_commands import (
    AuthenticateUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
    ValidateSession,
)
from keystone.application.commands.password_commands import (
    ChangePassword,
    ConfirmPasswordReset,
    RequestPasswordReset,
)
from keystone.application.commands.user_commands import (
    ChangeAccountStatus,
    CreateUser,
    HardDeleteUser,
    RegisterUser,
    ResolveSecurityEvent,
)

__all__ = [
    # Auth commands
    "AuthenticateUser",
    "LogoutAllSessions",
    "LogoutUser",
    "RefreshSession",
    "ValidateSession",
    # Password commands
    "ChangePassword",
    "ConfirmPasswordReset",
    "RequestPasswordReset",
    # Account administration
    "ChangeAccountStatus",
    "CreateUser",
    "HardDeleteUser",
    "RegisterUser",
    "ResolveSecurityEvent",
]
