"""Board Adapter - Interfaces with Monday.com boards for QA items."""

from ticketbridge.board.adapter import MondayAdapter
from ticketbridge.board.exceptions import BoardError, BoardNotFoundError, ItemNotFoundError
from ticketbridge.board.models import (
    Column,
    ColumnPayload,
    Item,
    LinkValue,
    ParentRef,
    PeopleValue,
    StatusValue,
    TextValue,
    Update,
    decode_column_value,
    parse_item,
)

__all__ = [
    "BoardError",
    "BoardNotFoundError",
    "Column",
    "ColumnPayload",
    "Item",
    "ItemNotFoundError",
    "LinkValue",
    "MondayAdapter",
    "ParentRef",
    "PeopleValue",
    "StatusValue",
    "TextValue",
    "Update",
    "decode_column_value",
    "parse_item",
]
