"""Domain entities."""

from keystone.domain.entities.activity_log_entry import ActivityLogEntry
from keystone.domain.entities.login_history import LoginHistoryEntry
from keystone.domain.entities.password_history import PasswordHistoryEntry
from keystone.domain.entities.password_reset_token import PasswordResetToken
from keystone.domain.entities.security_event import SecurityEvent
from keystone.domain.entities.session import Session
from keystone.domain.entities.user import User

__all__ = [
    "ActivityLogEntry",
    "LoginHistoryEntry",
    "PasswordHistoryEntry",
    "PasswordResetToken",
    "SecurityEvent",
    "Session",
    "User",
]
