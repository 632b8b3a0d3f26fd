"""PasswordHashingProtocol - port for adaptive password hashing.

Implementations are synchronous and CPU-bound. Application code calls
them through ``asyncio.to_thread`` so hashing never blocks the event loop.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class HashedPassword:
    """Stored credential pair.

    Attributes:
        hash: Full hash string.
        salt: Salt the hash was derived with.
    """

    hash: str
    salt: str


class PasswordHashingProtocol(Protocol):
    """Protocol for password hashing adapters.

    Implementations:
        - BcryptPasswordService: keystone/infrastructure/security/bcrypt_password_service.py
    """

    def hash_password(self, password: str) -> HashedPassword:
        """Hash a plaintext password with a fresh salt."""
        ...

    def verify_password(self, password: str, password_hash: str, salt: str) -> bool:
        """Verify a plaintext password in constant time.

        Returns:
            True on match. False on mismatch or malformed stored hash.
        """
        ...
