"""Data Transfer Objects (DTOs) for the application layer.

DTOs are result dataclasses returned by command and query handlers.

Usage:
    from keystone.application.dtos import AuthenticationSucceeded, UserView
"""

from keystone.application.dtos.identity_dtos import (
    AuthenticationSucceeded,
    IssuedSession,
    LogoutResult,
    PasswordChanged,
    PasswordResetRequested,
    SessionsInvalidated,
    SessionSummary,
    SessionValidated,
    UserView,
)

__all__ = [
    "AuthenticationSucceeded",
    "IssuedSession",
    "LogoutResult",
    "PasswordChanged",
    "PasswordResetRequested",
    "SessionSummary",
    "SessionValidated",
    "SessionsInvalidated",
    "UserView",
]
