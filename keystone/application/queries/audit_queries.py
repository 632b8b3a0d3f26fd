"""Audit trail queries."""

from dataclasses import dataclass
from uuid import UUID

from keystone.domain.enums import SecuritySeverity


@dataclass(frozen=True, kw_only=True)
class ListSecurityEvents:
    """Page through security events, newest first.

    Attributes:
        user_id: Only events about this user.
        severity: Only events of this severity.
        limit: Page size.
        offset: Rows to skip.
    """

    user_id: UUID | None = None
    severity: SecuritySeverity | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True, kw_only=True)
class GetUserActivity:
    """Page through the activity log, newest first."""

    user_id: UUID | None = None
    limit: int = 50
    offset: int = 0
