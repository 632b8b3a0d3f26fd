"""JWT access token service (adapter).

Implements TokenGenerationProtocol with PyJWT and HMAC-SHA256.

Claims:
    sub: user id
    sid: session id (validation requires it to match the session row)
    email, role
    iat, exp, jti

The token's own ``exp`` is a second line of defence; the session row's
``expires_at`` is what validation enforces.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from keystone.core.result import Failure, Result, Success

INVALID_TOKEN = "invalid_token"


class JWTService:
    """JWT token generation and validation service.

    Usage:
        service = JWTService(secret_key=settings.jwt_secret, expiration_minutes=1440)
        token = service.generate_access_token(
            user_id=user.id, email=user.email, role="admin", session_id=sid
        )
        match service.validate_access_token(token):
            case Success(value=claims):
                ...
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 1440,
        issuer: str | None = None,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC-SHA256 signing key, at least 32 bytes.
            expiration_minutes: Token lifetime in minutes.
            issuer: Optional ``iss`` claim, verified on decode when set.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._issuer = issuer
        self._algorithm = "HS256"

    def generate_access_token(
        self,
        *,
        user_id: UUID,
        email: str,
        role: str,
        session_id: UUID,
    ) -> str:
        """Generate a signed access token bound to a session.

        Each call produces a unique ``jti``, so two tokens for the same
        session never collide.

        Returns:
            JWT string (header.payload.signature).
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "sid": str(session_id),
            "email": email,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }
        if self._issuer:
            payload["iss"] = self._issuer

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Verify signature and expiry and return the claims.

        Returns:
            Success with the claims, or Failure(INVALID_TOKEN) for any
            invalid, expired, tampered or malformed token.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "sid"]},
            )
        except InvalidTokenError:
            return Failure(error=INVALID_TOKEN)
        return Success(value=payload)
