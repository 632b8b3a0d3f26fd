"""Suspicious-activity advisory returned to admin tooling."""

from dataclasses import dataclass

from keystone.domain.enums import SecurityEventType, SecuritySeverity


@dataclass(frozen=True, slots=True, kw_only=True)
class SuspiciousActivity:
    """A single advisory flag. Never blocks a login on its own.

    Attributes:
        type: Heuristic that fired.
        severity: Suggested severity for review.
        description: Human-readable explanation.
    """

    type: SecurityEventType
    severity: SecuritySeverity
    description: str
