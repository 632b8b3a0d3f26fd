"""Domain value objects."""

from keystone.domain.value_objects.email import Email
from keystone.domain.value_objects.password_strength import PasswordStrength
from keystone.domain.value_objects.suspicious_activity import SuspiciousActivity

__all__ = ["Email", "PasswordStrength", "SuspiciousActivity"]
