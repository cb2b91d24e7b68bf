"""Data models for the Orchestrator module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ItemStatus(StrEnum):
    """Outcome of processing one item."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class CreationStrategy(StrEnum):
    """How a ticket gets created.

    DIRECT calls the tracker API synchronously. REQUEST writes the payload
    to the board's request column and waits for an external automation to
    write the ticket link back.
    """

    DIRECT = "direct"
    REQUEST = "request"


@dataclass(frozen=True)
class ItemResult:
    """Result of processing one item.

    Attributes:
        item_id: Board item ID.
        item_name: Board item name.
        status: Outcome.
        ticket_key: Created ticket key, on success.
        ticket_url: Created ticket URL, on success.
        reason: Why the item was skipped, or a non-fatal write-back warning.
        error: Error message, on error.
        timed_out: True when the automation did not answer in time.
    """

    item_id: str
    item_name: str
    status: ItemStatus
    ticket_key: str | None = None
    ticket_url: str | None = None
    reason: str | None = None
    error: str | None = None
    timed_out: bool = False


@dataclass(frozen=True)
class RunReport:
    """Result of one discover/process/report cycle.

    Attributes:
        items: One result per evaluated item, in processing order.
        fatal_error: Set when discovery failed and nothing was processed.
    """

    items: tuple[ItemResult, ...] = ()
    fatal_error: str | None = None

    def _count(self, status: ItemStatus) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def processed(self) -> int:
        return self._count(ItemStatus.SUCCESS)

    @property
    def skipped(self) -> int:
        return self._count(ItemStatus.SKIPPED)

    @property
    def errored(self) -> int:
        return self._count(ItemStatus.ERROR)

    @property
    def exit_code(self) -> int:
        """Process exit code for batch runs: 0 only if nothing failed."""
        return 1 if self.fatal_error or self.errored else 0
