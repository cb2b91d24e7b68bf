"""Tracker project key extraction from issue URLs."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

_ISSUE_KEY_RE = re.compile(r"^([A-Z0-9]+)-\d+$", re.IGNORECASE)
_SELECTED_ISSUE_RE = re.compile(r"selectedIssue=([A-Z0-9]+)-\d+", re.IGNORECASE)
_BROWSE_RE = re.compile(r"/browse/([A-Z0-9]+)-\d+", re.IGNORECASE)
_ANY_KEY_RE = re.compile(r"([A-Z0-9]+)-\d+", re.IGNORECASE)


def extract_project_key(url: str | None) -> str | None:
    """Extract the project key from a tracker URL.

    Tried in order:
        1. ``selectedIssue=KEY-123`` query parameter
        2. ``/browse/KEY-123`` path segment
        3. first ``KEY-123`` token anywhere in the URL

    Args:
        url: Issue or filter URL.

    Returns:
        Upper-cased project key, or None when no pattern matches.
    """
    if not url:
        return None

    try:
        query = parse_qs(urlsplit(url).query)
    except ValueError:
        query = {}
    for value in query.get("selectedIssue", []):
        match = _ISSUE_KEY_RE.match(value.strip())
        if match:
            return match.group(1).upper()

    for pattern in (_SELECTED_ISSUE_RE, _BROWSE_RE, _ANY_KEY_RE):
        match = pattern.search(url)
        if match:
            return match.group(1).upper()

    return None
