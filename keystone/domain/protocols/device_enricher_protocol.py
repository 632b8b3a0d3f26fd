"""Device enrichment protocol (port)."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceDetails:
    """Parsed user agent details. Every field is optional (fail-open)."""

    device_type: str | None = None
    browser: str | None = None
    browser_version: str | None = None
    os: str | None = None
    os_version: str | None = None
    is_bot: bool = False
    summary: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "device_type": self.device_type,
            "browser": self.browser,
            "browser_version": self.browser_version,
            "os": self.os,
            "os_version": self.os_version,
            "is_bot": self.is_bot,
            "summary": self.summary,
        }


class DeviceEnricherProtocol(Protocol):
    """Parses a user agent string into DeviceDetails."""

    def enrich(self, user_agent: str | None) -> DeviceDetails:
        ...
