"""Audit trail error type.

Returned by audit adapters when a write or query fails. The application
audit service logs it and never lets it reach the caller of the primary
operation.
"""

from dataclasses import dataclass

from keystone.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit system failure (database error, connection loss, etc.).

    Attributes:
        code: ErrorCode.AUDIT_RECORD_FAILED.
        message: Human-readable message.
        details: Additional context.
    """

    pass  # Inherits all fields from DomainError
