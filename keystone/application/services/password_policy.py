"""Password policy service.

Strength rules, non-blocking hashing and reuse detection.

bcrypt is deliberately slow (~250ms at cost 12). Every hash and verify runs
in a worker thread via ``asyncio.to_thread`` so concurrent requests keep
being served while a password is checked.
"""

import asyncio
import secrets
import string

from keystone.domain.entities import PasswordHistoryEntry
from keystone.domain.protocols import HashedPassword, PasswordHashingProtocol
from keystone.domain.validators import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    SPECIAL_CHARACTERS,
    validate_password_strength,
)
from keystone.domain.value_objects import PasswordStrength


class PasswordPolicy:
    """Password strength, hashing and history policy.

    Usage:
        policy = PasswordPolicy(hasher=BcryptPasswordService(12), history_depth=5)
        report = policy.validate_strength("SecurePass123!")
        hashed = await policy.hash_password("SecurePass123!")
        ok = await policy.verify_password("SecurePass123!", hashed.hash, hashed.salt)
    """

    def __init__(self, hasher: PasswordHashingProtocol, history_depth: int = 5) -> None:
        """Initialize password policy.

        Args:
            hasher: Synchronous hashing adapter.
            history_depth: How many previous passwords may not be reused.
        """
        self._hasher = hasher
        self._history_depth = history_depth

    @property
    def history_depth(self) -> int:
        return self._history_depth

    def validate_strength(self, password: str) -> PasswordStrength:
        return validate_password_strength(password)

    async def hash_password(self, password: str) -> HashedPassword:
        return await asyncio.to_thread(self._hasher.hash_password, password)

    async def verify_password(
        self, password: str, password_hash: str, password_salt: str
    ) -> bool:
        return await asyncio.to_thread(
            self._hasher.verify_password, password, password_hash, password_salt
        )

    async def is_reused(
        self, password: str, history: list[PasswordHistoryEntry]
    ) -> bool:
        """Check a candidate against the most recent history entries.

        Args:
            password: Candidate plaintext.
            history: Previous passwords, newest first.

        Returns:
            bool: True if the candidate matches any of the last
            ``history_depth`` passwords.
        """
        for entry in history[: self._history_depth]:
            if await self.verify_password(
                password, entry.password_hash, entry.password_salt
            ):
                return True
        return False

    @staticmethod
    def generate_secure_password(length: int = 16) -> str:
        """Generate a random password that satisfies every strength rule.

        Args:
            length: Password length (8 to 72).

        Returns:
            str: Password with at least one uppercase letter, lowercase
            letter, digit and special character.

        Raises:
            ValueError: If length is outside 8 to 72.
        """
        if not MIN_PASSWORD_LENGTH <= length <= MAX_PASSWORD_BYTES:
            msg = (
                f"Generated passwords must be {MIN_PASSWORD_LENGTH}"
                f"-{MAX_PASSWORD_BYTES} characters"
            )
            raise ValueError(msg)

        required = [
            secrets.choice(string.ascii_uppercase),
            secrets.choice(string.ascii_lowercase),
            secrets.choice(string.digits),
            secrets.choice(SPECIAL_CHARACTERS),
        ]
        alphabet = string.ascii_letters + string.digits + SPECIAL_CHARACTERS
        chars = required + [secrets.choice(alphabet) for _ in range(length - 4)]

        # Fisher-Yates shuffle with a CSPRNG
        for i in range(len(chars) - 1, 0, -1):
            j = secrets.randbelow(i + 1)
            chars[i], chars[j] = chars[j], chars[i]
        return "".join(chars)
