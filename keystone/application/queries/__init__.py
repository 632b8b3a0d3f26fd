"""Queries - Read operations that never change state."""

from keystone.application.queries.audit_queries import GetUserActivity, ListSecurityEvents
from keystone.application.queries.session_queries import (
    CheckSuspiciousActivity,
    GetLoginHistory,
    ListUserSessions,
)
from keystone.application.queries.user_queries import ListUsersByStatus

__all__ = [
    "CheckSuspiciousActivity",
    "GetLoginHistory",
    "GetUserActivity",
    "ListSecurityEvents",
    "ListUserSessions",
    "ListUsersByStatus",
]
