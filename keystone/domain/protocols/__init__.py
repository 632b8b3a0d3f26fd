"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; they never inherit.
"""

from keystone.domain.protocols.audit_protocol import AuditProtocol
from keystone.domain.protocols.device_enricher_protocol import (
    DeviceDetails,
    DeviceEnricherProtocol,
)
from keystone.domain.protocols.email_service_protocol import EmailServiceProtocol
from keystone.domain.protocols.logger_protocol import LoggerProtocol
from keystone.domain.protocols.login_history_repository import LoginHistoryRepository
from keystone.domain.protocols.opaque_token_protocol import OpaqueTokenProtocol
from keystone.domain.protocols.password_hashing_protocol import (
    HashedPassword,
    PasswordHashingProtocol,
)
from keystone.domain.protocols.password_history_repository import (
    PasswordHistoryRepository,
)
from keystone.domain.protocols.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from keystone.domain.protocols.rate_limiter_protocol import (
    AttemptRecord,
    AttemptStorageProtocol,
    RateLimiterProtocol,
    ip_identifier,
    user_identifier,
)
from keystone.domain.protocols.session_repository import SessionRepository
from keystone.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from keystone.domain.protocols.user_repository import UserRepository

__all__ = [
    "AttemptRecord",
    "AttemptStorageProtocol",
    "AuditProtocol",
    "DeviceDetails",
    "DeviceEnricherProtocol",
    "EmailServiceProtocol",
    "HashedPassword",
    "LoggerProtocol",
    "LoginHistoryRepository",
    "OpaqueTokenProtocol",
    "PasswordHashingProtocol",
    "PasswordHistoryRepository",
    "PasswordResetTokenRepository",
    "RateLimiterProtocol",
    "SessionRepository",
    "TokenGenerationProtocol",
    "UserRepository",
    "ip_identifier",
    "user_identifier",
]
