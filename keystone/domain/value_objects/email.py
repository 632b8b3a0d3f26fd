"""Email value object with validation."""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses the email-validator library for RFC-compliant syntax checks and
    stores the whole address lowercase, so lookups are case-insensitive.

    Attributes:
        value: The email address string (validated, lowercase)

    Raises:
        ValueError: If email format is invalid

    Example:
        >>> str(Email("Editor@Example.com"))
        'editor@example.com'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize the address.

        Raises:
            ValueError: If email format is invalid.
        """
        try:
            validated = validate_email(self.value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        return self.value
