"""Application services shared by the identity handlers."""

from keystone.application.services.audit_log import AuditLog
from keystone.application.services.credential_store import CredentialStore, NewUserData
from keystone.application.services.password_policy import PasswordPolicy
from keystone.application.services.session_manager import SessionManager

__all__ = [
    "AuditLog",
    "CredentialStore",
    "NewUserData",
    "PasswordPolicy",
    "SessionManager",
]
