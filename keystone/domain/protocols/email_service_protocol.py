"""EmailServiceProtocol - port for outbound account email."""

from typing import Protocol


class EmailServiceProtocol(Protocol):
    """Protocol for email sending operations.

    Implementations:
        - StubEmailService: keystone/infrastructure/email/stub_email_service.py
    """

    async def send_password_reset_email(
        self, to_email: str, reset_token: str, expires_minutes: int
    ) -> None:
        """Deliver a password reset token."""
        ...

    async def send_password_changed_notification(self, to_email: str) -> None:
        """Tell the owner their password changed."""
        ...
