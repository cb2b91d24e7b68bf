"""Exceptions for the Payload Mapper."""

from ticketbridge.exceptions import TicketBridgeError


class MappingError(TicketBridgeError):
    """A ticket payload cannot be built from the item and its parent."""
