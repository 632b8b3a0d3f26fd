"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from keystone.infrastructure.persistence.base import BaseModel, BaseMutableModel
from keystone.infrastructure.persistence.models.activity_log import ActivityLog
from keystone.infrastructure.persistence.models.login_history import LoginHistory
from keystone.infrastructure.persistence.models.password_history import PasswordHistory
from keystone.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from keystone.infrastructure.persistence.models.security_event import SecurityEvent
from keystone.infrastructure.persistence.models.session import Session
from keystone.infrastructure.persistence.models.user import User

__all__ = [
    "ActivityLog",
    "BaseModel",
    "BaseMutableModel",
    "LoginHistory",
    "PasswordHistory",
    "PasswordResetToken",
    "SecurityEvent",
    "Session",
    "User",
]
