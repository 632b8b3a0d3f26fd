"""Password strength report."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordStrength:
    """Outcome of a password strength check.

    Attributes:
        is_valid: True when every rule passed.
        errors: One message per failed rule, in rule order.
        score: Number of rules passed (0-5).
    """

    is_valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    score: int = 0
