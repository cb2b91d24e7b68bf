"""Interfaces the Orchestrator needs from external services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ticketbridge.board import Column, ColumnPayload, Item
    from ticketbridge.mapping import TicketPayload
    from ticketbridge.tracker import CreatedIssue


class BoardService(Protocol):
    """Interface for the board (implemented by MondayAdapter)."""

    def fetch_item(self, item_id: str) -> Item:
        """Get one item snapshot."""
        ...

    def fetch_items_by_board(self, board_id: str) -> list[Item]:
        """Get every item on a board."""
        ...

    def fetch_column(self, item_id: str, column_id: str) -> Column | None:
        """Read one column of an item."""
        ...

    def fetch_user_email(self, user_id: str) -> str | None:
        """Look up a user's email."""
        ...

    def mutate_column(
        self, board_id: str, item_id: str, column_id: str, value: str | ColumnPayload
    ) -> None:
        """Write a column value."""
        ...

    def update_link_column(
        self, board_id: str, item_id: str, column_id: str, url: str, text: str | None = None
    ) -> None:
        """Write a link column."""
        ...

    def update_status_column(self, board_id: str, item_id: str, column_id: str, label: str) -> None:
        """Write a status column."""
        ...


class TrackerService(Protocol):
    """Interface for the tracker (implemented by JiraClient)."""

    def create_issue(self, payload: TicketPayload) -> CreatedIssue:
        """Create an issue."""
        ...
