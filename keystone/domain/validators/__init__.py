"""Domain validators."""

from keystone.domain.validators.password_strength import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    SPECIAL_CHARACTERS,
    validate_password_strength,
)

__all__ = [
    "MAX_PASSWORD_BYTES",
    "MIN_PASSWORD_LENGTH",
    "SPECIAL_CHARACTERS",
    "validate_password_strength",
]
