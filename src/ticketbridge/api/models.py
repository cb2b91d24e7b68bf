"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ticketbridge.orchestrator import CreationStrategy, ItemStatus

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Ticket models


class TicketPayloadResponse(BaseModel):
    """Response model for a ticket payload."""

    model_config = ConfigDict(from_attributes=True)

    project_key: str
    summary: str
    description: str
    labels: list[str]
    issue_type: str


class DraftResponse(BaseModel):
    """Response model for a pre-filled ticket draft."""

    model_config = ConfigDict(from_attributes=True)

    project_key: str
    summary: str
    description: str
    labels: list[str]
    type_of_issue: str
    priority: str
    languages: str
    screenshot: str
    raw_update_body: str
    existing_link: str | None
    reporter_email: str | None
    payload: TicketPayloadResponse | None
    mapping_error: str | None


def draft_to_response(draft: Any) -> DraftResponse:
    """Convert a TicketDraft to DraftResponse."""
    return DraftResponse.model_validate(draft)


class IssueCreate(BaseModel):
    """Request model for creating an issue directly."""

    project_key: str = Field(..., min_length=1, max_length=32, pattern=r"^[A-Za-z0-9]+$")
    summary: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    issue_type: str = Field(default="Bug", min_length=1, max_length=64)
    labels: list[str] = Field(default_factory=list)
    item_id: str | None = None
    board_id: str | None = None


class IssueResponse(BaseModel):
    """Response model for a created issue."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    id: str
    url: str
    warnings: list[str] = Field(default_factory=list)


def issue_to_response(issue: Any, warnings: list[str] | None = None) -> IssueResponse:
    """Convert a CreatedIssue to IssueResponse."""
    return IssueResponse(key=issue.key, id=issue.id, url=issue.url, warnings=warnings or [])


# Sync models


class ItemResultResponse(BaseModel):
    """Response model for one processed item."""

    model_config = ConfigDict(from_attributes=True)

    item_id: str
    item_name: str
    status: ItemStatus
    ticket_key: str | None
    ticket_url: str | None
    reason: str | None
    error: str | None
    timed_out: bool


def item_result_to_response(result: Any) -> ItemResultResponse:
    """Convert an ItemResult to ItemResultResponse."""
    return ItemResultResponse.model_validate(result)


class RunReportResponse(BaseModel):
    """Response model for a batch run."""

    processed: int
    skipped: int
    errored: int
    exit_code: int
    fatal_error: str | None
    items: list[ItemResultResponse]


def report_to_response(report: Any) -> RunReportResponse:
    """Convert a RunReport to RunReportResponse."""
    return RunReportResponse(
        processed=report.processed,
        skipped=report.skipped,
        errored=report.errored,
        exit_code=report.exit_code,
        fatal_error=report.fatal_error,
        items=[item_result_to_response(i) for i in report.items],
    )


class SyncRequest(BaseModel):
    """Request model for a batch run."""

    strategy: CreationStrategy = CreationStrategy.DIRECT
