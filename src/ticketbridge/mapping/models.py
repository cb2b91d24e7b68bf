"""Data models for the Payload Mapper."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ticketbridge.mapping.exceptions import MappingError

_PROJECT_KEY_RE = re.compile(r"^[A-Z0-9]+$")


def to_adf(text: str) -> dict[str, Any]:
    """Render plain text as an Atlassian Document Format document.

    Blank lines separate paragraphs; single newlines become hard breaks.
    """
    content: list[dict[str, Any]] = []
    for block in re.split(r"\n\s*\n", text.strip()):
        nodes: list[dict[str, Any]] = []
        for i, line in enumerate(block.split("\n")):
            if i:
                nodes.append({"type": "hardBreak"})
            if line:
                nodes.append({"type": "text", "text": line})
        if nodes:
            content.append({"type": "paragraph", "content": nodes})
    return {"type": "doc", "version": 1, "content": content}


@dataclass(frozen=True)
class UpdateBody:
    """Plain-text view of an item update.

    Attributes:
        text: Full plain text with markup removed.
        description: Reported issue text.
        screenshot: First http(s) URL found, or "".
    """

    text: str
    description: str
    screenshot: str


@dataclass(frozen=True)
class TicketPayload:
    """Everything needed to create one tracker issue.

    Attributes:
        project_key: Tracker project key, e.g. "DOM2".
        summary: Issue summary line.
        description: Plain-text description.
        labels: Labels to attach.
        issue_type: Tracker issue type name.
    """

    project_key: str
    summary: str
    description: str
    labels: tuple[str, ...] = ()
    issue_type: str = "Bug"

    def __post_init__(self) -> None:
        if not _PROJECT_KEY_RE.match(self.project_key or ""):
            raise MappingError(f"Invalid project key: {self.project_key!r}")
        if not self.summary.strip():
            raise MappingError("Summary must not be empty")
        if not self.description.strip():
            raise MappingError("Description must not be empty")

    def to_fields(self) -> dict[str, Any]:
        """Render the Jira ``fields`` object for issue creation."""
        return {
            "project": {"key": self.project_key},
            "summary": self.summary,
            "description": to_adf(self.description),
            "issuetype": {"name": self.issue_type},
            "labels": list(self.labels),
        }

    def to_request(
        self,
        item_id: str,
        board_id: str | None,
        reporter_email: str | None = None,
    ) -> dict[str, Any]:
        """Render the request record read by the creation automation."""
        return {
            "projectKey": self.project_key,
            "summary": self.summary,
            "description": self.description,
            "issueType": self.issue_type,
            "labels": list(self.labels),
            "reporterEmail": reporter_email,
            "subitemId": item_id,
            "boardId": board_id,
        }


@dataclass(frozen=True)
class TicketDraft:
    """Pre-filled ticket fields for interactive review.

    Never fails: when the payload cannot be built, ``payload`` is None,
    ``mapping_error`` says why and ``project_key`` holds a display fallback.
    """

    project_key: str
    summary: str
    description: str
    labels: tuple[str, ...]
    type_of_issue: str
    priority: str
    languages: str
    screenshot: str
    raw_update_body: str
    existing_link: str | None = None
    reporter_email: str | None = None
    payload: TicketPayload | None = None
    mapping_error: str | None = None
