"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol with bcrypt.

Security:
    - Adaptive cost (2^cost rounds), configurable via BCRYPT_ROUNDS
    - Salt generated per hash and stored beside it
    - bcrypt.checkpw performs the comparison in constant time

bcrypt only reads the first 72 bytes of input. Longer passwords are
truncated explicitly so hashing and verification agree on every library
version.
"""

import bcrypt

from keystone.domain.protocols import HashedPassword

BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Methods are synchronous and CPU-bound (~250ms at cost 12). Callers on the
    event loop go through PasswordPolicy, which offloads them to a thread.

    Usage:
        service = BcryptPasswordService(cost_factor=12)
        hashed = service.hash_password("SecurePass123!")
        service.verify_password("SecurePass123!", hashed.hash, hashed.salt)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (default: 12).
                Each +1 doubles computation time.

        Raises:
            ValueError: If cost_factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> HashedPassword:
        """Hash a plaintext password with a fresh salt.

        Args:
            password: Plaintext password to hash.

        Returns:
            HashedPassword: 60-character ``$2b$`` hash and its 29-character
            salt prefix.

        Example:
            >>> service = BcryptPasswordService()
            >>> a = service.hash_password("SecurePass123!")
            >>> b = service.hash_password("SecurePass123!")
            >>> a.hash != b.hash  # Different salts
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(_encode(password), salt)
        return HashedPassword(hash=password_hash.decode("utf-8"), salt=salt.decode("utf-8"))

    def verify_password(self, password: str, password_hash: str, salt: str) -> bool:
        """Verify a plaintext password against a stored hash.

        The stored salt must be the one embedded in the hash. A record whose
        salt and hash disagree never verifies.

        Args:
            password: Plaintext password to verify.
            password_hash: Stored bcrypt hash.
            salt: Stored salt.

        Returns:
            True if password matches hash, False otherwise (including
            malformed hashes).
        """
        if salt and not password_hash.startswith(salt):
            return False
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            # Invalid hash format or encoding error
            return False
