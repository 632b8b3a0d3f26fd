"""Password lifecycle commands."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Ask for a reset link.

    The response never reveals whether the email is registered.
    """

    email: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Set a new password with an emailed reset token.

    Attributes:
        token: Raw reset token from the email link.
        new_password: New plaintext password.
    """

    token: str
    new_password: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Change a password.

    Users changing their own password supply ``current_password``. An
    administrator changing someone else's password sets ``changed_by`` and
    may omit it, and may also omit ``new_password`` to get a generated
    temporary password back.

    Attributes:
        user_id: Account whose password changes.
        new_password: New plaintext password (optional for admin resets).
        current_password: Current plaintext password (self-service).
        changed_by: Admin performing the change.
    """

    user_id: UUID
    new_password: str | None = None
    current_password: str | None = None
    changed_by: UUID | None = None
    ip_address: str | None = None
    user_agent: str | None = None
