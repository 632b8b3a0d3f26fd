"""Account queries."""

from dataclasses import dataclass

from keystone.domain.enums import AccountStatus


@dataclass(frozen=True, kw_only=True)
class ListUsersByStatus:
    """List accounts in a lifecycle status (e.g. PENDING awaiting approval)."""

    status: AccountStatus = AccountStatus.PENDING
    limit: int = 50
    offset: int = 0
