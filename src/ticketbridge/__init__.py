"""TicketBridge - Sync QA board items into tracker tickets."""

__version__ = "0.1.0"
