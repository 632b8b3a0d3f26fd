"""Security adapters (hashing, tokens)."""

from keystone.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from keystone.infrastructure.security.jwt_service import JWTService
from keystone.infrastructure.security.opaque_token_service import (
    OpaqueTokenService,
    hash_token,
)

__all__ = ["BcryptPasswordService", "JWTService", "OpaqueTokenService", "hash_token"]
