"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends

from ticketbridge.board import MondayAdapter
from ticketbridge.orchestrator import SyncOrchestrator
from ticketbridge.tracker import JiraClient

if TYPE_CHECKING:
    from ticketbridge.config import Settings
    from ticketbridge.mapping import TicketDraft, TicketPayload
    from ticketbridge.orchestrator import CreationStrategy, ItemResult, RunReport
    from ticketbridge.tracker import CreatedIssue


class Orchestrator(Protocol):
    """Interface for the Synchronization Orchestrator."""

    def preview(self, item_id: str) -> TicketDraft:
        """Pre-filled ticket fields for an item."""
        ...

    def request_ticket(self, item_id: str) -> ItemResult:
        """Request a ticket for an item and wait for the link."""
        ...

    def run(self, strategy: CreationStrategy = ...) -> RunReport:
        """Run one batch cycle."""
        ...

    def create_reviewed(
        self,
        payload: TicketPayload,
        item_id: str | None = ...,
        board_id: str | None = ...,
    ) -> tuple[CreatedIssue, list[str]]:
        """Create a ticket from reviewed fields, optionally linking an item."""
        ...


# Global service instances (initialized on app startup)
_board: MondayAdapter | None = None
_tracker: JiraClient | None = None
_orchestrator: Orchestrator | None = None


def init_services(settings: Settings) -> SyncOrchestrator:
    """Initialize the global board, tracker and Orchestrator instances."""
    global _board, _tracker, _orchestrator  # noqa: PLW0603
    _board = MondayAdapter(token=settings.board_token)
    _tracker = JiraClient(
        base_url=settings.tracker_base_url,
        email=settings.tracker_email,
        api_token=settings.tracker_token,
    )
    orchestrator = SyncOrchestrator.from_settings(settings, board=_board, tracker=_tracker)
    _orchestrator = orchestrator
    return orchestrator


def close_services() -> None:
    """Close the global service instances."""
    global _board, _tracker, _orchestrator  # noqa: PLW0603
    if _board is not None:
        _board.close()
        _board = None
    if _tracker is not None:
        _tracker.close()
        _tracker = None
    _orchestrator = None


def get_orchestrator() -> Generator[Orchestrator, None, None]:
    """Dependency that provides the Orchestrator instance."""
    if _orchestrator is None:
        raise RuntimeError("Orchestrator not initialized. Call init_services() first.")
    yield _orchestrator


# Type aliases for dependency injection
OrchestratorDep = Annotated[Orchestrator, Depends(get_orchestrator)]
