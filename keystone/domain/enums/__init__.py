"""Domain enums."""

from keystone.domain.enums.account_status import ALLOWED_TRANSITIONS, AccountStatus
from keystone.domain.enums.activity_action import ActivityAction
from keystone.domain.enums.security_event_type import SecurityEventType
from keystone.domain.enums.security_severity import SecuritySeverity
from keystone.domain.enums.user_role import UserRole

__all__ = [
    "ALLOWED_TRANSITIONS",
    "AccountStatus",
    "ActivityAction",
    "SecurityEventType",
    "SecuritySeverity",
    "UserRole",
]
