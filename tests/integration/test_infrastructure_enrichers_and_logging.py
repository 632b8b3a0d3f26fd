"""Integration tests for UserAgentDeviceEnricher and ConsoleAdapter.

Architecture:
- Real user-agents parser and real structlog (not mocked)
- Fresh ConsoleAdapter instances per test
"""

import json

import pytest

from keystone.infrastructure.enrichers import UserAgentDeviceEnricher
from keystone.infrastructure.logging import ConsoleAdapter
from tests.conftest import CHROME_UA

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
GOOGLEBOT_UA = (
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
)


@pytest.mark.integration
class TestUserAgentDeviceEnricher:
    """Integration tests for user agent parsing."""

    def test_desktop_chrome(self):
        """Test a desktop Chrome agent is parsed."""
        details = UserAgentDeviceEnricher().enrich(CHROME_UA)

        assert details.device_type == "desktop"
        assert details.browser == "Chrome"
        assert details.os == "Mac OS X"
        assert details.summary == "Chrome on Mac OS X"
        assert details.is_bot is False

    def test_mobile_safari(self):
        """Test an iPhone agent is a mobile device."""
        details = UserAgentDeviceEnricher().enrich(IPHONE_UA)

        assert details.device_type == "mobile"
        assert details.os == "iOS"

    def test_bot(self):
        """Test crawlers are flagged."""
        details = UserAgentDeviceEnricher().enrich(GOOGLEBOT_UA)

        assert details.device_type == "bot"
        assert details.is_bot is True

    @pytest.mark.parametrize("user_agent", [None, ""])
    def test_missing_agent_gives_empty_details(self, user_agent):
        """Test no agent yields empty details."""
        details = UserAgentDeviceEnricher().enrich(user_agent)

        assert details.device_type is None
        assert details.summary is None


@pytest.mark.integration
class TestConsoleAdapterIntegration:
    """Integration tests for ConsoleAdapter with real structlog."""

    def _lines(self, capsys) -> list[dict]:
        output = capsys.readouterr().out.strip().splitlines()
        return [json.loads(line) for line in output]

    def test_json_mode_produces_valid_json(self, capsys):
        """Test JSON mode writes one parseable object per line."""
        adapter = ConsoleAdapter(use_json=True)

        adapter.info("user_login", user_id="123", count=2)

        [entry] = self._lines(capsys)
        assert entry["event"] == "user_login"
        assert entry["level"] == "info"
        assert entry["user_id"] == "123"
        assert entry["count"] == 2
        assert "timestamp" in entry

    def test_error_adds_exception_fields(self, capsys):
        """Test error() flattens the exception into type and message."""
        adapter = ConsoleAdapter(use_json=True)

        adapter.error("db_failed", error=ConnectionError("refused"))

        [entry] = self._lines(capsys)
        assert entry["error_type"] == "ConnectionError"
        assert entry["error_message"] == "refused"

    def test_credentials_are_redacted(self, capsys):
        """Test password and token keys never reach the output."""
        adapter = ConsoleAdapter(use_json=True)

        adapter.warning("suspicious", password="hunter2", refresh_token="abc")

        raw = capsys.readouterr().out
        assert "hunter2" not in raw
        assert "abc" not in raw
        assert json.loads(raw)["password"] == "***"

    def test_bind_carries_context(self, capsys):
        """Test bound context appears on later messages."""
        adapter = ConsoleAdapter(use_json=True).bind(request_id="req-1")

        adapter.info("first")
        adapter.info("second")

        entries = self._lines(capsys)
        assert [e["request_id"] for e in entries] == ["req-1", "req-1"]

    def test_level_filtering(self, capsys):
        """Test messages below the configured level are dropped."""
        adapter = ConsoleAdapter(use_json=True, level="WARNING")

        adapter.info("hidden")
        adapter.warning("shown")

        assert [e["event"] for e in self._lines(capsys)] == ["shown"]
