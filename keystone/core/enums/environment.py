"""Runtime environments.

Used by Settings to pick environment-specific behaviour (log renderer,
SQL echo).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
