"""Direct issue creation endpoint."""

from fastapi import APIRouter, status

from ticketbridge.api.dependencies import OrchestratorDep
from ticketbridge.api.models import (
    APIResponse,
    IssueCreate,
    IssueResponse,
    issue_to_response,
)
from ticketbridge.mapping import TicketPayload

router = APIRouter(prefix="/issues", tags=["issues"])


@router.post(
    "",
    response_model=APIResponse[IssueResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_issue(issue: IssueCreate, orchestrator: OrchestratorDep) -> APIResponse[IssueResponse]:
    """Create an issue from reviewed fields.

    When ``item_id`` is given, the issue link and created status are
    written back to that board item.
    """
    payload = TicketPayload(
        project_key=issue.project_key.upper(),
        summary=issue.summary,
        description=issue.description,
        labels=tuple(issue.labels),
        issue_type=issue.issue_type,
    )
    created, warnings = orchestrator.create_reviewed(
        payload, item_id=issue.item_id, board_id=issue.board_id
    )
    return APIResponse(data=issue_to_response(created, warnings))
