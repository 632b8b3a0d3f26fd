"""Application service factories (app-scoped singletons)."""

from functools import lru_cache

from keystone.application.services import (
    AuditLog,
    CredentialStore,
    PasswordPolicy,
    SessionManager,
)
from keystone.core.config import get_settings
from keystone.core.container.infrastructure import (
    get_audit,
    get_logger,
    get_opaque_token_service,
    get_password_service,
    get_token_service,
)
from keystone.core.container.repositories import (
    get_login_history_repository,
    get_password_history_repository,
    get_session_repository,
    get_user_repository,
)


@lru_cache()
def get_audit_log() -> AuditLog:
    return AuditLog(audit=get_audit(), logger=get_logger())


@lru_cache()
def get_password_policy() -> PasswordPolicy:
    return PasswordPolicy(
        hasher=get_password_service(),
        history_depth=get_settings().password_history_depth,
    )


@lru_cache()
def get_credential_store() -> CredentialStore:
    settings = get_settings()
    return CredentialStore(
        user_repo=get_user_repository(),
        password_history_repo=get_password_history_repository(),
        password_policy=get_password_policy(),
        audit_log=get_audit_log(),
        logger=get_logger(),
        max_login_attempts=settings.max_login_attempts,
        lockout_minutes=settings.lockout_time,
    )


@lru_cache()
def get_session_manager() -> SessionManager:
    return SessionManager(
        session_repo=get_session_repository(),
        user_repo=get_user_repository(),
        login_history_repo=get_login_history_repository(),
        token_service=get_token_service(),
        opaque_tokens=get_opaque_token_service(),
        audit_log=get_audit_log(),
        logger=get_logger(),
        session_timeout_hours=get_settings().session_timeout,
    )
