"""Shared exception hierarchy for TicketBridge."""


class TicketBridgeError(Exception):
    """Base exception for all TicketBridge errors."""


class TransportError(TicketBridgeError):
    """A call to the board or tracker service failed."""


class ConfigurationError(TicketBridgeError):
    """Required external configuration is missing or invalid."""
