"""Password strength rules.

Five rules, each worth one point of score:
    - At least 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character from SPECIAL_CHARACTERS

Passwords over MAX_PASSWORD_BYTES (UTF-8) are rejected outright: bcrypt
ignores everything past that point, so two such passwords sharing a prefix
would verify as each other. The cap is not a scored rule.
"""

import re

from keystone.domain.value_objects import PasswordStrength

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72
SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

_RULES: tuple[tuple[re.Pattern[str] | None, str], ...] = (
    (None, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"\d"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
        "Password must contain at least one special character",
    ),
)


def validate_password_strength(password: str) -> PasswordStrength:
    """Check a candidate password against every strength rule.

    Unlike a value object constructor this does not stop at the first
    failure: callers render every missing rule at once.

    Args:
        password: Plaintext candidate.

    Returns:
        PasswordStrength with all failed-rule messages and the score.

    Example:
        >>> report = validate_password_strength("weak")
        >>> report.is_valid, report.score
        (False, 1)
    """
    errors: list[str] = []
    for pattern, message in _RULES:
        if pattern is None:
            passed = len(password) >= MIN_PASSWORD_LENGTH
        else:
            passed = pattern.search(password) is not None
        if not passed:
            errors.append(message)
    score = len(_RULES) - len(errors)

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    return PasswordStrength(is_valid=not errors, errors=tuple(errors), score=score)
