"""Configuration loading for TicketBridge.

All settings come from the environment. Column ids default to the
production Localization QA board layout and can be overridden per
deployment through :class:`ColumnMap`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from ticketbridge.exceptions import ConfigurationError

DEFAULT_BOARD_ID = "18393273008"
DEFAULT_READY_STATUS = "Ready for Jira"
DEFAULT_CREATED_STATUS = "Jira Created"
DEFAULT_POLL_INTERVAL = 3.0
DEFAULT_POLL_TIMEOUT = 120.0
DEFAULT_URL_MARKER = "atlassian.net"

REQUIRED_ENV = (
    "MONDAY_API_TOKEN",
    "JIRA_BASE_URL",
    "JIRA_EMAIL",
    "JIRA_API_TOKEN",
)


@dataclass(frozen=True)
class ColumnMap:
    """Board column ids used by the sync.

    Attributes:
        status: Subitem "Report to dev" status column.
        item_link: Subitem column holding the created ticket link.
        parent_link: Parent column holding a tracker link (project key source).
        type_of_issue: Subitem category column.
        languages: Subitem affected-languages dropdown.
        priority: Subitem priority column.
        request: Subitem long-text column read by the creation automation.
        person: Parent people column naming the reporter.
    """

    status: str = "color_mkz23qay"
    item_link: str = "link_mkz21j9b"
    parent_link: str = "link_mkz3e37y"
    type_of_issue: str = "color_mkz2tbex"
    languages: str = "dropdown_mkz29ax2"
    priority: str = "color_mkz4hv6s"
    request: str = "long_text_mm0cavf7"
    person: str = "person"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for a sync run or the HTTP server."""

    board_token: str
    tracker_base_url: str
    tracker_email: str
    tracker_token: str
    board_id: str = DEFAULT_BOARD_ID
    ready_status: str = DEFAULT_READY_STATUS
    created_status: str = DEFAULT_CREATED_STATUS
    poll_interval: float = DEFAULT_POLL_INTERVAL
    poll_timeout: float = DEFAULT_POLL_TIMEOUT
    url_marker: str = DEFAULT_URL_MARKER
    columns: ColumnMap = field(default_factory=ColumnMap)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Parsed settings.

        Raises:
            ConfigurationError: If required variables are missing or a
                numeric value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        missing = [key for key in REQUIRED_ENV if not env.get(key)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            board_token=env["MONDAY_API_TOKEN"],
            tracker_base_url=env["JIRA_BASE_URL"].rstrip("/"),
            tracker_email=env["JIRA_EMAIL"],
            tracker_token=env["JIRA_API_TOKEN"],
            board_id=env.get("MONDAY_BOARD_ID") or DEFAULT_BOARD_ID,
            ready_status=env.get("TICKETBRIDGE_READY_STATUS") or DEFAULT_READY_STATUS,
            created_status=env.get("TICKETBRIDGE_CREATED_STATUS") or DEFAULT_CREATED_STATUS,
            poll_interval=_float_env(env, "TICKETBRIDGE_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            poll_timeout=_float_env(env, "TICKETBRIDGE_POLL_TIMEOUT", DEFAULT_POLL_TIMEOUT),
            url_marker=env.get("TICKETBRIDGE_URL_MARKER") or DEFAULT_URL_MARKER,
        )


def _float_env(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {raw!r}")
    return value
