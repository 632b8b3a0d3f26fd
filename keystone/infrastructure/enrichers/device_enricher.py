"""Device enricher implementation using the user-agents library.

Parses user agent strings into device type, browser and OS. Fail-open:
an unparseable agent yields empty details rather than an error.
"""

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from keystone.domain.protocols import DeviceDetails, LoggerProtocol


class UserAgentDeviceEnricher:
    """Device enricher using the user-agents library.

    Implements DeviceEnricherProtocol (structural typing).
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._logger = logger

    def enrich(self, user_agent: str | None) -> DeviceDetails:
        """Parse a user agent string.

        Args:
            user_agent: Raw user agent string from the client.

        Returns:
            DeviceDetails, empty on missing or unparseable input.
        """
        if not user_agent:
            return DeviceDetails()

        try:
            ua: UserAgent = parse_user_agent(user_agent)
        except Exception as e:  # noqa: BLE001 - user-agents raises assorted parser errors
            if self._logger is not None:
                self._logger.warning(
                    "user_agent_parse_failed",
                    user_agent=user_agent[:100],
                    error_message=str(e),
                )
            return DeviceDetails()

        browser = ua.browser.family or None
        os_name = ua.os.family or None
        return DeviceDetails(
            device_type=self._determine_device_type(ua),
            browser=browser,
            browser_version=ua.browser.version_string or None,
            os=os_name,
            os_version=ua.os.version_string or None,
            is_bot=bool(ua.is_bot),
            summary=self._build_summary(browser, os_name),
        )

    def _determine_device_type(self, ua: UserAgent) -> str:
        if ua.is_bot:
            return "bot"
        if ua.is_mobile:
            return "mobile"
        if ua.is_tablet:
            return "tablet"
        if ua.is_pc:
            return "desktop"
        return "other"

    def _build_summary(self, browser: str | None, os_name: str | None) -> str | None:
        """Human-readable "Chrome on Mac OS X" style string."""
        if browser and os_name:
            return f"{browser} on {os_name}"
        if browser:
            return browser
        if os_name:
            return f"Unknown browser on {os_name}"
        return None
