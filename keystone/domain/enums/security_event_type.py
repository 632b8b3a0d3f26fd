"""Security event types recorded by the identity subsystem.

Values are stored verbatim in the security_events table and are what
admin tooling filters on.
"""

from enum import Enum


class SecurityEventType(str, Enum):
    """Kinds of security incidents."""

    # Login path
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    LOGIN_FAILED_USER_NOT_FOUND = "login_failed_user_not_found"
    USER_RATE_LIMIT_EXCEEDED = "user_rate_limit_exceeded"
    LOGIN_ATTEMPT_LOCKED_ACCOUNT = "login_attempt_locked_account"
    LOGIN_ATTEMPT_INACTIVE_ACCOUNT = "login_attempt_inactive_account"
    LOGIN_ATTEMPT_SUSPENDED_ACCOUNT = "login_attempt_suspended_account"
    ACCOUNT_LOCKED_FAILED_ATTEMPTS = "account_locked_failed_attempts"
    AUTHENTICATION_SYSTEM_ERROR = "authentication_system_error"

    # Sessions
    SESSION_INVALIDATED_USER_INACTIVE = "session_invalidated_user_inactive"
    ALL_SESSIONS_INVALIDATED = "all_sessions_invalidated"

    # Password lifecycle
    PASSWORD_CHANGE_FAILED = "password_change_failed"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"

    # Account administration
    USER_SUSPENDED = "user_suspended"
    USER_HARD_DELETED = "user_hard_deleted"

    # Suspicious-activity advisories
    MULTIPLE_FAILED_LOGINS = "multiple_failed_logins"
    NEW_IP_ADDRESS = "new_ip_address"
    MULTIPLE_CONCURRENT_SESSIONS = "multiple_concurrent_sessions"
