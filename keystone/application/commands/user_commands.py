"""Account administration commands."""

from dataclasses import dataclass
from uuid import UUID

from keystone.domain.enums import AccountStatus, UserRole


@dataclass(frozen=True, kw_only=True)
class CreateUser:
    """Administrator creates an account.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        email: Email address.
        password: Initial plaintext password.
        role: Account role.
        status: Initial status (ACTIVE unless the admin wants approval later).
        created_by: Admin performing the creation.
    """

    first_name: str
    last_name: str
    email: str
    password: str
    role: UserRole = UserRole.USER
    status: AccountStatus = AccountStatus.ACTIVE
    created_by: UUID | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Public sign-up. The account starts PENDING."""

    first_name: str
    last_name: str
    email: str
    password: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ChangeAccountStatus:
    """Move an account through its lifecycle.

    Attributes:
        user_id: Account to change.
        target: Desired status.
        actor_id: Admin performing the change.
        reason: Free-text reason (audit).
    """

    user_id: UUID
    target: AccountStatus
    actor_id: UUID
    reason: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class HardDeleteUser:
    """Permanently remove an account and everything that cascades from it."""

    user_id: UUID
    actor_id: UUID
    reason: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResolveSecurityEvent:
    """Administrator marks a security event as handled."""

    event_id: UUID
    resolved_by: UUID
