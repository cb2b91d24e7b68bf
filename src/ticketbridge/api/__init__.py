"""REST API for TicketBridge."""

from ticketbridge.api.app import app, create_app
from ticketbridge.api.models import (
    APIResponse,
    DraftResponse,
    IssueCreate,
    IssueResponse,
    RunReportResponse,
)

__all__ = [
    "APIResponse",
    "DraftResponse",
    "IssueCreate",
    "IssueResponse",
    "RunReportResponse",
    "app",
    "create_app",
]
