"""Domain errors package.

Usage:
    from keystone.domain.errors import AuditError, IdentityError
"""

from keystone.domain.errors.audit_error import AuditError
from keystone.domain.errors.identity_error import IdentityError, IdentityMessage
from keystone.domain.errors.invalid_status_transition import InvalidStatusTransition

__all__ = [
    "AuditError",
    "IdentityError",
    "IdentityMessage",
    "InvalidStatusTransition",
]
