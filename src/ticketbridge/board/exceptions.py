"""Custom exceptions for the board adapter."""

from ticketbridge.exceptions import TransportError


class BoardError(TransportError):
    """Base exception for board adapter errors."""


class ItemNotFoundError(BoardError):
    """Item with given ID does not exist."""


class BoardNotFoundError(BoardError):
    """Board with given ID does not exist."""
