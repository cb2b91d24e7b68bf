"""Unit tests for settings loading."""

import pytest

from ticketbridge import __version__
from ticketbridge.config import ColumnMap, Settings
from ticketbridge.exceptions import ConfigurationError

REQUIRED = {
    "MONDAY_API_TOKEN": "monday-token",
    "JIRA_BASE_URL": "https://acme.atlassian.net/",
    "JIRA_EMAIL": "bot@acme.com",
    "JIRA_API_TOKEN": "jira-token",
}


@pytest.mark.unit
def test_version_format():
    """Verify that version follows semver format."""
    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


@pytest.mark.unit
class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self) -> None:
        """Optional settings fall back to production defaults."""
        settings = Settings.from_env(REQUIRED)

        assert settings.board_token == "monday-token"
        assert settings.tracker_base_url == "https://acme.atlassian.net"
        assert settings.board_id == "18393273008"
        assert settings.ready_status == "Ready for Jira"
        assert settings.created_status == "Jira Created"
        assert settings.poll_interval == 3.0
        assert settings.poll_timeout == 120.0
        assert settings.url_marker == "atlassian.net"
        assert settings.columns == ColumnMap()

    def test_overrides(self) -> None:
        env = {
            **REQUIRED,
            "MONDAY_BOARD_ID": "42",
            "TICKETBRIDGE_READY_STATUS": "Go",
            "TICKETBRIDGE_POLL_INTERVAL": "0.5",
            "TICKETBRIDGE_POLL_TIMEOUT": "10",
        }

        settings = Settings.from_env(env)

        assert settings.board_id == "42"
        assert settings.ready_status == "Go"
        assert settings.poll_interval == 0.5
        assert settings.poll_timeout == 10.0

    def test_missing_required_lists_all(self) -> None:
        """Every missing variable is named in one error."""
        env = {"MONDAY_API_TOKEN": "x"}

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env(env)

        message = str(exc_info.value)
        assert "JIRA_BASE_URL" in message
        assert "JIRA_EMAIL" in message
        assert "JIRA_API_TOKEN" in message
        assert "MONDAY_API_TOKEN" not in message

    def test_empty_value_counts_as_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="JIRA_EMAIL"):
            Settings.from_env({**REQUIRED, "JIRA_EMAIL": ""})

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_poll_interval(self, raw: str) -> None:
        with pytest.raises(ConfigurationError, match="TICKETBRIDGE_POLL_INTERVAL"):
            Settings.from_env({**REQUIRED, "TICKETBRIDGE_POLL_INTERVAL": raw})
