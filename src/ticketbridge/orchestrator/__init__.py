"""Orchestrator package - Board to tracker synchronization."""

from ticketbridge.orchestrator.models import (
    CreationStrategy,
    ItemResult,
    ItemStatus,
    RunReport,
)
from ticketbridge.orchestrator.orchestrator import SyncOrchestrator
from ticketbridge.orchestrator.services import BoardService, TrackerService

__all__ = [
    "BoardService",
    "CreationStrategy",
    "ItemResult",
    "ItemStatus",
    "RunReport",
    "SyncOrchestrator",
    "TrackerService",
]
