"""Stub email service.

Logs outbound account email instead of sending it. Used in development
and tests; a real transport implements the same protocol.
"""

from keystone.domain.protocols import LoggerProtocol


class StubEmailService:
    """Email adapter that records deliveries in the log.

    Raw reset tokens are never logged; only their length is recorded.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger
        self.sent: list[tuple[str, str]] = []

    async def send_password_reset_email(
        self, to_email: str, reset_token: str, expires_minutes: int
    ) -> None:
        self.sent.append(("password_reset", to_email))
        self._logger.info(
            "password_reset_email_stubbed",
            to_email=to_email,
            token_length=len(reset_token),
            expires_minutes=expires_minutes,
        )

    async def send_password_changed_notification(self, to_email: str) -> None:
        self.sent.append(("password_changed", to_email))
        self._logger.info("password_changed_email_stubbed", to_email=to_email)
