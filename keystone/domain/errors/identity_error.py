"""Identity error type and the caller-facing messages.

Usage:
    from keystone.domain.errors import IdentityError, IdentityMessage
    from keystone.core.enums import ErrorCode
    from keystone.core.result import Failure

    return Failure(error=IdentityError.of(ErrorCode.INVALID_CREDENTIALS))
"""

from dataclasses import dataclass

from keystone.core.enums import ErrorCode
from keystone.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityError(DomainError):
    """Failure of an authentication, session or account operation.

    Attributes:
        code: ErrorCode enum (INVALID_CREDENTIALS, ACCOUNT_LOCKED, ...).
        message: Caller-facing message. Never contains internal detail.
        details: Additional context (e.g. password strength errors).
    """

    @classmethod
    def of(cls, code: ErrorCode, details: dict[str, str] | None = None) -> "IdentityError":
        """Build the error for ``code`` with its standard message."""
        return cls(code=code, message=getattr(IdentityMessage, code.name), details=details)


class IdentityMessage:
    """Caller-facing messages.

    The unknown-email and wrong-password paths share INVALID_CREDENTIALS so
    responses never reveal whether an account exists.
    """

    MISSING_CREDENTIALS = "Email and password are required"
    RATE_LIMITED = "Too many login attempts. Please try again later."
    INVALID_CREDENTIALS = "Invalid email or password"
    ACCOUNT_LOCKED = "Account temporarily locked due to multiple failed attempts"
    ACCOUNT_INACTIVE = "Account is deactivated"
    ACCOUNT_PENDING = "Account is pending approval"
    ACCOUNT_REJECTED = "Account has been rejected"
    ACCOUNT_SUSPENDED = "Account is suspended"
    ACCOUNT_NOT_ACTIVE = "Account is not active"
    SYSTEM_ERROR = "Authentication system error"

    INVALID_SESSION = "Invalid or expired session"
    USER_INACTIVE = "User account is no longer active"
    VALIDATION_ERROR = "Session validation failed"

    WEAK_PASSWORD = "Password does not meet strength requirements"
    PASSWORD_REUSED = "Cannot reuse any of your recent passwords"
    INVALID_CURRENT_PASSWORD = "Current password is incorrect"
    INVALID_RESET_TOKEN = "Invalid or expired password reset token"
    PASSWORD_RESET_REQUESTED = "If the email exists, a password reset link has been sent."

    USER_NOT_FOUND = "User not found"
    EMAIL_ALREADY_EXISTS = "User with this email already exists"
    INVALID_STATUS_TRANSITION = "Account status change is not allowed"
    SECURITY_EVENT_NOT_FOUND = "Security event not found"
    AUDIT_RECORD_FAILED = "Audit trail is unavailable"
    INVALID_EMAIL = "Invalid email address"
    MISSING_REQUIRED_FIELDS = "First name, last name, email, and password are required"
