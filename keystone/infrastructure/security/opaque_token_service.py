"""Opaque token generation and SHA-256 digests.

Used for refresh tokens, password reset tokens and for fingerprinting
access tokens. Only digests are ever persisted.

Token Strategy:
    - Random URL-safe string from ``secrets``
    - SHA-256 hex digest stored in the database
    - Comparison with ``hmac.compare_digest`` (constant time)
"""

import hashlib
import hmac
import secrets


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class OpaqueTokenService:
    """Opaque token generator.

    Usage:
        service = OpaqueTokenService(num_bytes=48)
        token, token_hash = service.generate_token()
        # persist token_hash, hand token to the caller once
        service.verify_token(presented, token_hash)
    """

    def __init__(self, num_bytes: int = 48) -> None:
        """Initialize token service.

        Args:
            num_bytes: Random bytes per token (default 48 = 384 bits).

        Raises:
            ValueError: If num_bytes is below 32.
        """
        if num_bytes < 32:
            msg = "Opaque tokens need at least 32 random bytes"
            raise ValueError(msg)
        self._num_bytes = num_bytes

    def generate_token(self) -> tuple[str, str]:
        """Generate a token and its digest.

        Returns:
            Tuple of (token, token_hash).
        """
        token = secrets.token_urlsafe(self._num_bytes)
        return token, hash_token(token)

    def hash_token(self, token: str) -> str:
        return hash_token(token)

    def verify_token(self, token: str, token_hash: str) -> bool:
        """Constant-time check of a presented token against a stored digest."""
        return hmac.compare_digest(hash_token(token), token_hash)
