"""Identity handler factories.

Handlers hold no per-call state, so each factory builds a fresh handler
around the shared app-scoped services.
"""

from keystone.application.commands.handlers.account_status_handler import (
    AccountStatusHandler,
)
from keystone.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from keystone.application.commands.handlers.change_password_handler import (
    ChangePasswordHandler,
)
from keystone.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from keystone.application.commands.handlers.create_user_handler import (
    CreateUserHandler,
)
from keystone.application.commands.handlers.ensure_bootstrap_admin_handler import (
    EnsureBootstrapAdminHandler,
)
from keystone.application.commands.handlers.hard_delete_user_handler import (
    HardDeleteUserHandler,
)
from keystone.application.commands.handlers.logout_all_sessions_handler import (
    LogoutAllSessionsHandler,
)
from keystone.application.commands.handlers.logout_user_handler import (
    LogoutUserHandler,
)
from keystone.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)
from keystone.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from keystone.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from keystone.application.commands.handlers.resolve_security_event_handler import (
    ResolveSecurityEventHandler,
)
from keystone.application.commands.handlers.validate_session_handler import (
    ValidateSessionHandler,
)
from keystone.application.queries.handlers.audit_query_handlers import (
    GetUserActivityHandler,
    ListSecurityEventsHandler,
)
from keystone.application.queries.handlers.check_suspicious_activity_handler import (
    CheckSuspiciousActivityHandler,
)
from keystone.application.queries.handlers.get_login_history_handler import (
    GetLoginHistoryHandler,
)
from keystone.application.queries.handlers.list_sessions_handler import (
    ListSessionsHandler,
)
from keystone.application.queries.handlers.list_users_handler import (
    ListUsersByStatusHandler,
)
from keystone.core.config import get_settings
from keystone.core.container.infrastructure import (
    get_device_enricher,
    get_email_service,
    get_logger,
    get_opaque_token_service,
    get_rate_limiter,
)
from keystone.core.container.repositories import (
    get_login_history_repository,
    get_password_reset_token_repository,
    get_user_repository,
)
from keystone.core.container.services import (
    get_audit_log,
    get_credential_store,
    get_password_policy,
    get_session_manager,
)

# ============================================================================
# Authentication and Sessions
# ============================================================================


def get_authenticate_user_handler() -> AuthenticateUserHandler:
    return AuthenticateUserHandler(
        credential_store=get_credential_store(),
        password_policy=get_password_policy(),
        session_manager=get_session_manager(),
        rate_limiter=get_rate_limiter(),
        login_history_repo=get_login_history_repository(),
        device_enricher=get_device_enricher(),
        audit_log=get_audit_log(),
        logger=get_logger(),
        ip_max_login_attempts=get_settings().ip_max_login_attempts,
    )


def get_validate_session_handler() -> ValidateSessionHandler:
    return ValidateSessionHandler(get_session_manager(), get_logger())


def get_refresh_session_handler() -> RefreshSessionHandler:
    return RefreshSessionHandler(get_session_manager(), get_logger())


def get_logout_user_handler() -> LogoutUserHandler:
    return LogoutUserHandler(get_session_manager(), get_audit_log(), get_logger())


def get_logout_all_sessions_handler() -> LogoutAllSessionsHandler:
    return LogoutAllSessionsHandler(get_session_manager(), get_audit_log())


# ============================================================================
# Passwords
# ============================================================================


def get_request_password_reset_handler() -> RequestPasswordResetHandler:
    return RequestPasswordResetHandler(
        credential_store=get_credential_store(),
        reset_token_repo=get_password_reset_token_repository(),
        opaque_tokens=get_opaque_token_service(),
        email_service=get_email_service(),
        audit_log=get_audit_log(),
        logger=get_logger(),
        expire_minutes=get_settings().password_reset_expire_minutes,
    )


def get_confirm_password_reset_handler() -> ConfirmPasswordResetHandler:
    return ConfirmPasswordResetHandler(
        credential_store=get_credential_store(),
        session_manager=get_session_manager(),
        reset_token_repo=get_password_reset_token_repository(),
        opaque_tokens=get_opaque_token_service(),
        email_service=get_email_service(),
        audit_log=get_audit_log(),
        logger=get_logger(),
    )


def get_change_password_handler() -> ChangePasswordHandler:
    return ChangePasswordHandler(
        credential_store=get_credential_store(),
        password_policy=get_password_policy(),
        session_manager=get_session_manager(),
        email_service=get_email_service(),
        audit_log=get_audit_log(),
        logger=get_logger(),
    )


# ============================================================================
# Account Administration
# ============================================================================


def get_create_user_handler() -> CreateUserHandler:
    return CreateUserHandler(get_credential_store())


def get_register_user_handler() -> RegisterUserHandler:
    return RegisterUserHandler(get_credential_store())


def get_account_status_handler() -> AccountStatusHandler:
    return AccountStatusHandler(
        credential_store=get_credential_store(),
        session_manager=get_session_manager(),
        audit_log=get_audit_log(),
        logger=get_logger(),
    )


def get_hard_delete_user_handler() -> HardDeleteUserHandler:
    return HardDeleteUserHandler(
        credential_store=get_credential_store(),
        audit_log=get_audit_log(),
        logger=get_logger(),
    )


def get_ensure_bootstrap_admin_handler() -> EnsureBootstrapAdminHandler:
    settings = get_settings()
    return EnsureBootstrapAdminHandler(
        credential_store=get_credential_store(),
        logger=get_logger(),
        admin_email=settings.admin_email,
        admin_password=settings.admin_password,
    )


# ============================================================================
# Queries and Audit
# ============================================================================


def get_list_sessions_handler() -> ListSessionsHandler:
    return ListSessionsHandler(get_session_manager())


def get_login_history_handler() -> GetLoginHistoryHandler:
    return GetLoginHistoryHandler(get_login_history_repository())


def get_check_suspicious_activity_handler() -> CheckSuspiciousActivityHandler:
    return CheckSuspiciousActivityHandler(get_session_manager())


def get_list_security_events_handler() -> ListSecurityEventsHandler:
    return ListSecurityEventsHandler(get_audit_log())


def get_user_activity_handler() -> GetUserActivityHandler:
    return GetUserActivityHandler(get_audit_log())


def get_resolve_security_event_handler() -> ResolveSecurityEventHandler:
    return ResolveSecurityEventHandler(get_audit_log())


def get_list_users_by_status_handler() -> ListUsersByStatusHandler:
    return ListUsersByStatusHandler(get_user_repository())
