"""OpaqueTokenProtocol - port for random bearer secrets.

Used for session refresh tokens and password reset tokens. Only the
SHA-256 hash of a token is ever persisted.
"""

from typing import Protocol


class OpaqueTokenProtocol(Protocol):
    """Protocol for opaque token adapters.

    Implementations:
        - OpaqueTokenService: keystone/infrastructure/security/opaque_token_service.py
    """

    def generate_token(self) -> tuple[str, str]:
        """Return ``(raw_token, token_hash)``."""
        ...

    def hash_token(self, token: str) -> str:
        ...

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Constant-time comparison of a raw token against a stored hash."""
        ...
