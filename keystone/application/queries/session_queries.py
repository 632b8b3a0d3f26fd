"""Session and login queries (CQRS read operations).

Queries represent requests for information. They are immutable
dataclasses with question-like names. Queries NEVER change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListUserSessions:
    """List a user's active sessions.

    Attributes:
        user_id: Owner.
        current_session_id: Caller's own session (marked in the result).
    """

    user_id: UUID
    current_session_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class GetLoginHistory:
    """Page through a user's login attempts, newest first."""

    user_id: UUID
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True, kw_only=True)
class CheckSuspiciousActivity:
    """Run the suspicious-activity heuristics for a user and source IP."""

    user_id: UUID
    ip_address: str | None = None
