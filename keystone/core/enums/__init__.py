"""Core enums package.

Usage:
    from keystone.core.enums import ErrorCode, Environment
"""

from keystone.core.enums.environment import Environment
from keystone.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
