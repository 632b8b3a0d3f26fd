"""Severity levels for security events."""

from enum import Enum


class SecuritySeverity(str, Enum):
    """Severity tag of a security event.

    LOW: informational (unknown email, new IP)
    MEDIUM: worth reviewing (rate limit hit, bulk logout)
    HIGH: account-level incident (lockout, suspension)
    CRITICAL: the authentication system itself failed
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
