"""Per-item endpoints for interactive ticket creation."""

from fastapi import APIRouter

from ticketbridge.api.dependencies import OrchestratorDep
from ticketbridge.api.models import (
    APIResponse,
    DraftResponse,
    ItemResultResponse,
    draft_to_response,
    item_result_to_response,
)

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/{item_id}/draft", response_model=APIResponse[DraftResponse])
def get_draft(item_id: str, orchestrator: OrchestratorDep) -> APIResponse[DraftResponse]:
    """Get pre-filled ticket fields for an item."""
    draft = orchestrator.preview(item_id)
    return APIResponse(data=draft_to_response(draft))


@router.post("/{item_id}/ticket", response_model=APIResponse[ItemResultResponse])
def request_ticket(
    item_id: str, orchestrator: OrchestratorDep
) -> APIResponse[ItemResultResponse]:
    """Request a ticket for an item and wait for the automation to link it.

    The call blocks until the link appears or the wait times out. Item-level
    failures are returned in ``data`` with ``status`` set to "error".
    """
    result = orchestrator.request_ticket(item_id)
    return APIResponse(data=item_result_to_response(result), error=result.error)
