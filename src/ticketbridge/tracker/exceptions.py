"""Custom exceptions for the tracker client."""

from ticketbridge.exceptions import TransportError


class TrackerError(TransportError):
    """Base exception for tracker client errors."""


class IssueCreationError(TrackerError):
    """The tracker rejected or failed an issue creation request."""
