"""JiraClient - Handles issue creation in Jira Cloud."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import httpx

from ticketbridge.logging import loggable_body
from ticketbridge.tracker.exceptions import IssueCreationError, TrackerError
from ticketbridge.tracker.models import CreatedIssue

if TYPE_CHECKING:
    from ticketbridge.mapping import TicketPayload

logger = logging.getLogger("ticketbridge.tracker")

_BROWSE_KEY_RE = re.compile(r"/browse/([A-Z0-9]+-\d+)", re.IGNORECASE)


def extract_issue_key(url: str) -> str | None:
    """Extract ``KEY-123`` from a ``.../browse/KEY-123`` URL."""
    match = _BROWSE_KEY_RE.search(url or "")
    return match.group(1).upper() if match else None


class JiraClient:
    """Creates issues through the Jira REST API (v3).

    Authenticates with an account email and API token using basic auth.
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Jira Client.

        Args:
            base_url: Jira site URL, e.g. https://example.atlassian.net
            email: Account email used for basic auth
            api_token: Jira API token
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.email = email
        self.api_token = api_token
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Jira API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                auth=(self.email, self.api_token),
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def browse_url(self, key: str) -> str:
        """Human-facing URL of an issue."""
        return f"{self.base_url}/browse/{key}"

    def create_issue(self, payload: TicketPayload) -> CreatedIssue:
        """Create an issue.

        Args:
            payload: Ticket payload to submit

        Returns:
            CreatedIssue with key, id and browse URL

        Raises:
            IssueCreationError: If Jira rejects the request
            TrackerError: If the request cannot be sent
        """
        return self.create_issue_from_fields(payload.to_fields())

    def create_issue_from_fields(self, fields: dict[str, Any]) -> CreatedIssue:
        """Create an issue from an already-rendered ``fields`` object.

        Args:
            fields: Jira issue fields

        Returns:
            CreatedIssue with key, id and browse URL

        Raises:
            IssueCreationError: If Jira rejects the request
            TrackerError: If the request cannot be sent
        """
        project = (fields.get("project") or {}).get("key")
        logger.info("Creating issue in project %s: %s", project, fields.get("summary"))
        try:
            response = self.client.post("/rest/api/3/issue", json={"fields": fields})
        except httpx.HTTPError as e:
            logger.error("Jira request failed: %s", e)
            raise TrackerError(f"Jira request failed: {e}") from e

        if response.status_code not in (200, 201):
            body = loggable_body(response.text)
            logger.error("Jira API error %s: %s", response.status_code, body)
            raise IssueCreationError(
                f"Failed to create issue: {response.status_code} - {body}"
            )

        try:
            data = response.json()
            key, issue_id = str(data["key"]), str(data["id"])
        except (ValueError, KeyError, TypeError) as e:
            body = loggable_body(response.text)
            logger.error("Unexpected Jira response %s: %s", response.status_code, body)
            raise TrackerError(f"Unexpected Jira response: {response.status_code} - {body}") from e
        issue = CreatedIssue(key=key, id=issue_id, url=self.browse_url(key))
        logger.info("Created issue %s: %s", issue.key, issue.url)
        return issue
