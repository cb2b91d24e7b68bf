"""SyncOrchestrator - Board to tracker synchronization loop."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from ticketbridge.board import TextValue
from ticketbridge.config import ColumnMap, Settings
from ticketbridge.exceptions import TicketBridgeError, TransportError
from ticketbridge.mapping import MappingError, PayloadMapper
from ticketbridge.orchestrator.models import CreationStrategy, ItemResult, ItemStatus, RunReport
from ticketbridge.tracker import extract_issue_key
from ticketbridge.waiter import CompletionWaiter, extract_link_url, url_contains

if TYPE_CHECKING:
    from ticketbridge.board import Item
    from ticketbridge.mapping import TicketDraft, TicketPayload
    from ticketbridge.orchestrator.services import BoardService, TrackerService
    from ticketbridge.tracker import CreatedIssue

logger = logging.getLogger("ticketbridge.orchestrator")

ALREADY_LINKED = "already linked"
NO_PARENT = "no parent - cannot determine project"
AUTOMATION_TIMEOUT = (
    "Timed out waiting for the automation to create the ticket. "
    "Check that the automation workflow is active."
)


class SyncOrchestrator:
    """Creates tracker tickets for board items, at most once per item.

    For every item flagged as ready, the Orchestrator:
    - skips it if its link column already holds a ticket URL
    - resolves the parent item (which names the tracker project)
    - maps the item to a ticket payload
    - creates the ticket directly, or requests it and waits for the link
    - writes the link and the "created" status back to the board

    Items are processed one at a time. A failure on one item is recorded
    in the report and never stops the run.
    """

    def __init__(
        self,
        board: BoardService,
        tracker: TrackerService | None,
        board_id: str,
        mapper: PayloadMapper | None = None,
        waiter: CompletionWaiter | None = None,
        columns: ColumnMap | None = None,
        ready_status: str = "Ready for Jira",
        created_status: str = "Jira Created",
        url_marker: str = "atlassian.net",
    ) -> None:
        """Initialize the Orchestrator.

        Args:
            board: Board service for reads and write-backs.
            tracker: Tracker service for direct creation. May be None when
                only the REQUEST strategy is used.
            board_id: Board to scan for ready items.
            mapper: Payload mapper.
            waiter: Completion waiter for the REQUEST strategy.
            columns: Board column ids.
            ready_status: Status text marking items for ticket creation.
            created_status: Status label written after creation.
            url_marker: Substring a ticket URL must contain to be accepted.
        """
        self.board = board
        self.tracker = tracker
        self.board_id = board_id
        self.columns = columns or ColumnMap()
        self.mapper = mapper or PayloadMapper(columns=self.columns)
        self.waiter = waiter or CompletionWaiter()
        self.ready_status = ready_status
        self.created_status = created_status
        self.url_marker = url_marker

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        board: BoardService,
        tracker: TrackerService | None,
    ) -> SyncOrchestrator:
        """Build an Orchestrator wired from runtime settings."""
        return cls(
            board=board,
            tracker=tracker,
            board_id=settings.board_id,
            mapper=PayloadMapper(columns=settings.columns),
            waiter=CompletionWaiter(
                interval=settings.poll_interval, timeout=settings.poll_timeout
            ),
            columns=settings.columns,
            ready_status=settings.ready_status,
            created_status=settings.created_status,
            url_marker=settings.url_marker,
        )

    def discover(self) -> list[Item]:
        """Fetch all board items and keep those whose status is ready."""
        items = self.board.fetch_items_by_board(self.board_id)
        ready = [i for i in items if i.column_text(self.columns.status) == self.ready_status]
        logger.info(
            "Found %d item(s) with status %r out of %d total",
            len(ready),
            self.ready_status,
            len(items),
        )
        return ready

    def run(self, strategy: CreationStrategy = CreationStrategy.DIRECT) -> RunReport:
        """Run one discover/process/report cycle.

        Args:
            strategy: How tickets are created.

        Returns:
            RunReport with one entry per evaluated item.
        """
        logger.info("Starting sync for board %s (strategy=%s)", self.board_id, strategy)

        try:
            candidates = self.discover()
        except Exception as e:
            logger.exception("Fatal error during discovery: %s", e)
            return RunReport(fatal_error=str(e) or type(e).__name__)

        results = [self._process_safely(item, strategy) for item in candidates]
        report = RunReport(items=tuple(results))

        logger.info(
            "Sync complete: processed %d, skipped %d, errors %d",
            report.processed,
            report.skipped,
            report.errored,
        )
        return report

    def _process_safely(self, item: Item, strategy: CreationStrategy) -> ItemResult:
        """Process one item, recording any unexpected failure as an item error."""
        try:
            return self.process_item(item, strategy)
        except Exception as e:
            logger.exception("Unexpected error processing item %s", item.id)
            return self._error(item, f"unexpected error: {str(e) or type(e).__name__}")

    def existing_link(self, item: Item) -> str | None:
        """Ticket URL already linked on the item, if any."""
        return extract_link_url(item.column(self.columns.item_link))

    def process_item(
        self,
        item: Item,
        strategy: CreationStrategy = CreationStrategy.DIRECT,
    ) -> ItemResult:
        """Guard, map, create and write back one item.

        Args:
            item: Item snapshot to process.
            strategy: How the ticket is created.

        Returns:
            ItemResult describing the outcome.
        """
        logger.info("Processing item %s (%s)", item.name, item.id)

        if self.existing_link(item):
            logger.info("Skipping item %s: already linked", item.id)
            return ItemResult(
                item_id=item.id,
                item_name=item.name,
                status=ItemStatus.SKIPPED,
                reason=ALREADY_LINKED,
            )

        if item.parent is None:
            logger.error("Item %s has no parent", item.id)
            return self._error(item, NO_PARENT)

        board_id = item.board_id or self.board_id
        try:
            parent = self.board.fetch_item(item.parent.id)
            payload = self.mapper.build_payload(
                item, parent, impersonal=strategy == CreationStrategy.REQUEST
            )
            logger.info("Mapped item %s to project %s", item.id, payload.project_key)

            match strategy:
                case CreationStrategy.DIRECT:
                    issue = self._require_tracker().create_issue(payload)
                    ticket_key, ticket_url = issue.key, issue.url
                case CreationStrategy.REQUEST:
                    url = self._request_and_wait(item, parent, payload, board_id)
                    if url is None:
                        logger.warning("Item %s: automation did not answer in time", item.id)
                        return self._error(item, AUTOMATION_TIMEOUT, timed_out=True)
                    ticket_key, ticket_url = extract_issue_key(url) or url, url
        except MappingError as e:
            logger.error("Cannot map item %s: %s", item.id, e)
            return self._error(item, str(e))
        except TicketBridgeError as e:
            logger.error("Error processing item %s: %s", item.id, e)
            return self._error(item, str(e))

        warnings = self._write_back(
            board_id,
            item.id,
            ticket_url,
            ticket_key,
            write_link=strategy == CreationStrategy.DIRECT,
        )

        logger.info("Item %s linked to %s", item.id, ticket_key)
        return ItemResult(
            item_id=item.id,
            item_name=item.name,
            status=ItemStatus.SUCCESS,
            ticket_key=ticket_key,
            ticket_url=ticket_url,
            reason="; ".join(warnings) or None,
        )

    def request_ticket(self, item_id: str) -> ItemResult:
        """Interactive creation for one item: request, then wait for the link.

        Raises:
            TransportError: If the item cannot be fetched.
        """
        item = self.board.fetch_item(item_id)
        return self.process_item(item, CreationStrategy.REQUEST)

    def preview(self, item_id: str) -> TicketDraft:
        """Pre-filled ticket fields for an item, for interactive review.

        Raises:
            TransportError: If the item cannot be fetched.
        """
        item = self.board.fetch_item(item_id)
        parent = self.board.fetch_item(item.parent.id) if item.parent else None
        return self.mapper.build_draft(
            item,
            parent,
            existing_link=self.existing_link(item),
            reporter_email=self._reporter_email(parent) if parent else None,
        )

    def create_reviewed(
        self,
        payload: TicketPayload,
        item_id: str | None = None,
        board_id: str | None = None,
    ) -> tuple[CreatedIssue, list[str]]:
        """Create a ticket from reviewed fields, linking it to an item if given.

        Returns:
            The created issue and any write-back warnings.

        Raises:
            TransportError: If the tracker call fails.
        """
        issue = self._require_tracker().create_issue(payload)
        if item_id is None:
            return issue, []
        warnings = self._write_back(
            board_id or self.board_id, item_id, issue.url, issue.key, write_link=True
        )
        logger.info("Item %s linked to %s", item_id, issue.key)
        return issue, warnings

    def _require_tracker(self) -> TrackerService:
        if self.tracker is None:
            raise TicketBridgeError("No tracker configured for direct creation")
        return self.tracker

    def _request_and_wait(
        self,
        item: Item,
        parent: Item,
        payload: TicketPayload,
        board_id: str,
    ) -> str | None:
        """Write the creation request and wait for the automation's link."""
        request = payload.to_request(
            item_id=item.id,
            board_id=board_id,
            reporter_email=self._reporter_email(parent),
        )
        self.board.mutate_column(
            board_id, item.id, self.columns.request, TextValue(text=json.dumps(request))
        )
        logger.info("Wrote ticket request for item %s, waiting for link", item.id)

        return self.waiter.wait(
            lambda: extract_link_url(self.board.fetch_column(item.id, self.columns.item_link)),
            accept=url_contains(self.url_marker),
        )

    def _reporter_email(self, parent: Item) -> str | None:
        user_id = self.mapper.reporter_id(parent)
        if user_id is None:
            return None
        try:
            return self.board.fetch_user_email(user_id)
        except TransportError as e:
            logger.warning("Could not resolve reporter %s: %s", user_id, e)
            return None

    def _write_back(
        self,
        board_id: str,
        item_id: str,
        ticket_url: str,
        ticket_key: str,
        write_link: bool,
    ) -> list[str]:
        """Write link and status back to the board.

        Failures are logged and returned as warnings; the ticket exists
        either way.
        """
        warnings: list[str] = []
        if write_link:
            try:
                self.board.update_link_column(
                    board_id, item_id, self.columns.item_link, ticket_url, ticket_key
                )
            except TransportError as e:
                logger.warning("Failed to write link for item %s: %s", item_id, e)
                warnings.append(f"link write-back failed: {e}")
        try:
            self.board.update_status_column(
                board_id, item_id, self.columns.status, self.created_status
            )
        except TransportError as e:
            logger.warning("Failed to update status for item %s: %s", item_id, e)
            warnings.append(f"status write-back failed: {e}")
        return warnings

    def _error(self, item: Item, message: str, timed_out: bool = False) -> ItemResult:
        return ItemResult(
            item_id=item.id,
            item_name=item.name,
            status=ItemStatus.ERROR,
            error=message,
            timed_out=timed_out,
        )
