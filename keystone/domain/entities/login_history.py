"""Login history entry (append-only)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginHistoryEntry:
    """One login attempt against a known account.

    Source of truth for the suspicious-activity heuristics.

    Attributes:
        id: Entry identifier.
        user_id: Account the attempt targeted.
        ip_address: Client IP.
        user_agent: Raw user agent string.
        device_type: mobile, tablet, desktop or bot.
        browser: Browser family.
        success: Whether the attempt produced a session.
        failure_reason: ErrorCode value for failed attempts.
        created_at: When the attempt happened.
    """

    id: UUID
    user_id: UUID
    success: bool
    ip_address: str | None = None
    user_agent: str | None = None
    device_type: str | None = None
    browser: str | None = None
    failure_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
