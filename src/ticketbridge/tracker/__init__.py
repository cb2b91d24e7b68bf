"""Tracker Client - Creates issues in Jira."""

from ticketbridge.tracker.client import JiraClient, extract_issue_key
from ticketbridge.tracker.exceptions import IssueCreationError, TrackerError
from ticketbridge.tracker.models import CreatedIssue

__all__ = [
    "CreatedIssue",
    "IssueCreationError",
    "JiraClient",
    "TrackerError",
    "extract_issue_key",
]
