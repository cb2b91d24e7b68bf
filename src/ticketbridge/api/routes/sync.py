"""Sync endpoint for manual batch runs."""

from fastapi import APIRouter

from ticketbridge.api.dependencies import OrchestratorDep
from ticketbridge.api.models import (
    APIResponse,
    RunReportResponse,
    SyncRequest,
    report_to_response,
)

router = APIRouter(tags=["sync"])


@router.post("/sync", response_model=APIResponse[RunReportResponse])
def sync_board(
    orchestrator: OrchestratorDep, sync_request: SyncRequest | None = None
) -> APIResponse[RunReportResponse]:
    """Run one discover/process/report cycle over the board."""
    strategy = (sync_request or SyncRequest()).strategy
    report = orchestrator.run(strategy)
    return APIResponse(data=report_to_response(report), error=report.fatal_error)
