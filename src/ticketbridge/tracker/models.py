"""Data models for the tracker client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CreatedIssue:
    """Issue returned by the tracker after creation."""

    key: str
    id: str
    url: str
