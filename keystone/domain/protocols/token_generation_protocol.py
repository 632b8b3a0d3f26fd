"""TokenGenerationProtocol - port for signed access tokens."""

from typing import Any, Protocol
from uuid import UUID

from keystone.core.result import Result


class TokenGenerationProtocol(Protocol):
    """Protocol for access token adapters.

    Implementations:
        - JWTService: keystone/infrastructure/security/jwt_service.py
    """

    def generate_access_token(
        self,
        *,
        user_id: UUID,
        email: str,
        role: str,
        session_id: UUID,
    ) -> str:
        """Issue a signed access token bound to a session."""
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Verify signature and expiry, returning the claims."""
        ...
