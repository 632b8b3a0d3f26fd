"""Machine-readable error codes returned by identity operations.

Values are the stable wire strings callers switch on, so they never change
once published.

Categories:
- Login gate (MISSING_CREDENTIALS ... ACCOUNT_NOT_ACTIVE)
- Session validation (INVALID_SESSION, USER_INACTIVE, VALIDATION_ERROR)
- Password lifecycle (WEAK_PASSWORD, PASSWORD_REUSED, ...)
- Account administration (USER_NOT_FOUND, INVALID_STATUS_TRANSITION, ...)
- Infrastructure (SYSTEM_ERROR, AUDIT_RECORD_FAILED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Identity error codes."""

    # Login gate
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_PENDING = "ACCOUNT_PENDING"
    ACCOUNT_REJECTED = "ACCOUNT_REJECTED"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    ACCOUNT_NOT_ACTIVE = "ACCOUNT_NOT_ACTIVE"

    # Session validation
    INVALID_SESSION = "INVALID_SESSION"
    USER_INACTIVE = "USER_INACTIVE"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Password lifecycle
    WEAK_PASSWORD = "WEAK_PASSWORD"
    PASSWORD_REUSED = "PASSWORD_REUSED"
    INVALID_CURRENT_PASSWORD = "INVALID_CURRENT_PASSWORD"
    INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"

    # Account administration
    MISSING_REQUIRED_FIELDS = "MISSING_REQUIRED_FIELDS"
    INVALID_EMAIL = "INVALID_EMAIL"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    SECURITY_EVENT_NOT_FOUND = "SECURITY_EVENT_NOT_FOUND"

    # Infrastructure
    SYSTEM_ERROR = "SYSTEM_ERROR"
    AUDIT_RECORD_FAILED = "AUDIT_RECORD_FAILED"
