"""Account lifecycle status and its transition table.

Status changes are admin-driven. The table below is the only place that
decides which moves are legal; callers never assign a status string
directly.

    pending   -> active (approve), rejected (reject), inactive (soft delete)
    active    -> suspended (suspend), inactive (soft delete)
    suspended -> active (reinstate), inactive (soft delete)
    rejected  -> active (approve), inactive (soft delete)
    inactive  -> active (reactivate)

Locking is orthogonal to status and lives on the User entity
(``locked_until``).
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Enumerated account lifecycle state."""

    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"

    def can_transition_to(self, target: "AccountStatus") -> bool:
        """Check whether moving from this status to ``target`` is legal.

        Args:
            target: Desired status.

        Returns:
            True if the transition table allows the move.
        """
        return target in ALLOWED_TRANSITIONS[self]

    @property
    def allows_login(self) -> bool:
        """Only active accounts may log in."""
        return self is AccountStatus.ACTIVE


ALLOWED_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.PENDING: frozenset(
        {AccountStatus.ACTIVE, AccountStatus.REJECTED, AccountStatus.INACTIVE}
    ),
    AccountStatus.ACTIVE: frozenset({AccountStatus.SUSPENDED, AccountStatus.INACTIVE}),
    AccountStatus.SUSPENDED: frozenset({AccountStatus.ACTIVE, AccountStatus.INACTIVE}),
    AccountStatus.REJECTED: frozenset({AccountStatus.ACTIVE, AccountStatus.INACTIVE}),
    AccountStatus.INACTIVE: frozenset({AccountStatus.ACTIVE}),
}
