"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from keystone.core.container import get_logger, get_authenticate_user_handler

The container is organized into modules by concern:
- infrastructure: Core adapters (logging, db, hashing, tokens, limiter, audit)
- repositories: Repository factories
- services: Application services (PasswordPolicy, CredentialStore, ...)
- handlers: Command and query handler factories
- lifecycle: Startup and shutdown
"""

# Infrastructure services
from keystone.core.container.infrastructure import (
    get_audit,
    get_database,
    get_device_enricher,
    get_email_service,
    get_logger,
    get_opaque_token_service,
    get_password_service,
    get_rate_limiter,
    get_token_service,
)

# Repositories
from keystone.core.container.repositories import (
    get_login_history_repository,
    get_password_history_repository,
    get_password_reset_token_repository,
    get_session_repository,
    get_user_repository,
)

# Application services
from keystone.core.container.services import (
    get_audit_log,
    get_credential_store,
    get_password_policy,
    get_session_manager,
)

# Handlers
from keystone.core.container.handlers import (
    get_account_status_handler,
    get_authenticate_user_handler,
    get_change_password_handler,
    get_check_suspicious_activity_handler,
    get_confirm_password_reset_handler,
    get_create_user_handler,
    get_ensure_bootstrap_admin_handler,
    get_hard_delete_user_handler,
    get_list_security_events_handler,
    get_list_sessions_handler,
    get_list_users_by_status_handler,
    get_login_history_handler,
    get_logout_all_sessions_handler,
    get_logout_user_handler,
    get_refresh_session_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_resolve_security_event_handler,
    get_user_activity_handler,
    get_validate_session_handler,
)

# Lifecycle
from keystone.core.container.lifecycle import start_identity, stop_identity

__all__ = [
    # Infrastructure
    "get_audit",
    "get_database",
    "get_device_enricher",
    "get_email_service",
    "get_logger",
    "get_opaque_token_service",
    "get_password_service",
    "get_rate_limiter",
    "get_token_service",
    # Repositories
    "get_login_history_repository",
    "get_password_history_repository",
    "get_password_reset_token_repository",
    "get_session_repository",
    "get_user_repository",
    # Services
    "get_audit_log",
    "get_credential_store",
    "get_password_policy",
    "get_session_manager",
    # Handlers
    "get_account_status_handler",
    "get_authenticate_user_handler",
    "get_change_password_handler",
    "get_check_suspicious_activity_handler",
    "get_confirm_password_reset_handler",
    "get_create_user_handler",
    "get_ensure_bootstrap_admin_handler",
    "get_hard_delete_user_handler",
    "get_list_security_events_handler",
    "get_list_sessions_handler",
    "get_list_users_by_status_handler",
    "get_login_history_handler",
    "get_logout_all_sessions_handler",
    "get_logout_user_handler",
    "get_refresh_session_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    "get_resolve_security_event_handler",
    "get_user_activity_handler",
    "get_validate_session_handler",
    # Lifecycle
    "start_identity",
    "stop_identity",
]
