"""Actions recorded in the user activity log."""

from enum import Enum


class ActivityAction(str, Enum):
    """Security-relevant user or admin actions.

    Naming: <subject>_<past tense verb>.
    """

    # Authentication
    USER_LOGIN = "user_login"
    LOGIN_FAILED = "login_failed"
    USER_LOGOUT = "user_logout"
    ALL_SESSIONS_LOGOUT = "logout_all_sessions"
    SESSION_REFRESHED = "session_refreshed"

    # Account lifecycle
    USER_CREATED = "user_created"
    USER_REGISTERED = "user_registered"
    USER_APPROVED = "user_approved"
    USER_REJECTED = "user_rejected"
    USER_SUSPENDED = "user_suspended"
    USER_REACTIVATED = "user_reactivated"
    USER_DELETED = "user_deleted"
    USER_HARD_DELETED = "user_hard_deleted"

    # Password lifecycle
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET_COMPLETED = "password_reset_completed"

    # Admin tooling
    SECURITY_EVENT_RESOLVED = "security_event_resolved"
