"""Data models for the board adapter.

Raw column values arrive from the board API as JSON-encoded strings whose
shape depends on the column type. They are decoded once, here, into a small
tagged union so the rest of the system never re-parses them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LinkValue:
    """Link column value."""

    url: str
    text: str = ""

    def to_wire(self) -> dict[str, str]:
        return {"url": self.url, "text": self.text or self.url}


@dataclass(frozen=True)
class StatusValue:
    """Status (color) column value."""

    label: str | None = None
    index: int | None = None

    def to_wire(self) -> dict[str, Any]:
        if self.label is not None:
            return {"label": self.label}
        return {"index": self.index}


@dataclass(frozen=True)
class PeopleValue:
    """People column value (person ids only, teams are ignored)."""

    person_ids: tuple[str, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        return {"personsAndTeams": [{"id": int(pid), "kind": "person"} for pid in self.person_ids]}


@dataclass(frozen=True)
class TextValue:
    """Long text / free text column value."""

    text: str

    def to_wire(self) -> dict[str, str]:
        return {"text": self.text}


ColumnPayload = LinkValue | StatusValue | PeopleValue | TextValue


def decode_column_value(raw: str | None) -> ColumnPayload | None:
    """Decode a raw board column value.

    Args:
        raw: The raw ``value`` string from the board API.

    Returns:
        The typed value, or None when the column is empty or its shape
        carries nothing the sync reads (e.g. dropdown option ids).
    """
    if raw is None or raw == "":
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return TextValue(text=str(raw))

    if data is None:
        return None
    if isinstance(data, str):
        return TextValue(text=data)
    if not isinstance(data, dict):
        return None

    if "url" in data:
        return LinkValue(url=data.get("url") or "", text=data.get("text") or "")
    if "personsAndTeams" in data:
        ids = tuple(
            str(entry["id"])
            for entry in data.get("personsAndTeams") or []
            if entry.get("kind", "person") == "person" and "id" in entry
        )
        return PeopleValue(person_ids=ids)
    if "label" in data or "index" in data:
        label = data.get("label")
        if isinstance(label, dict):
            label = label.get("text")
        index = data.get("index")
        return StatusValue(label=label, index=int(index) if index is not None else None)
    if "text" in data:
        return TextValue(text=data.get("text") or "")
    return None


@dataclass(frozen=True)
class Column:
    """A column record on an item."""

    id: str
    text: str = ""
    value: ColumnPayload | None = None
    type: str | None = None

    @property
    def link_url(self) -> str | None:
        """URL of a link value, if any."""
        if isinstance(self.value, LinkValue) and self.value.url:
            return self.value.url
        return None


@dataclass(frozen=True)
class Update:
    """A free-text update posted on an item."""

    id: str
    body: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class ParentRef:
    """Back-reference to an item's parent."""

    id: str
    name: str = ""


@dataclass(frozen=True)
class Item:
    """Read-only snapshot of a board item."""

    id: str
    name: str
    columns: tuple[Column, ...] = ()
    updates: tuple[Update, ...] = ()
    parent: ParentRef | None = None
    board_id: str | None = None
    _index: dict[str, Column] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {column.id: column for column in self.columns})

    def column(self, column_id: str) -> Column | None:
        return self._index.get(column_id)

    def column_text(self, column_id: str) -> str:
        column = self._index.get(column_id)
        return column.text if column else ""

    def column_value(self, column_id: str) -> ColumnPayload | None:
        column = self._index.get(column_id)
        return column.value if column else None


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse an ISO-8601 board timestamp, returning None when unparseable.

    Naive timestamps are taken as UTC so every parsed value is comparable.
    """
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_column(data: dict[str, Any]) -> Column:
    return Column(
        id=str(data["id"]),
        text=data.get("text") or "",
        value=decode_column_value(data.get("value")),
        type=data.get("type"),
    )


def parse_item(data: dict[str, Any]) -> Item:
    """Build an :class:`Item` from a board API item node."""
    parent_data = data.get("parent_item")
    parent = None
    if parent_data and parent_data.get("id"):
        parent = ParentRef(id=str(parent_data["id"]), name=parent_data.get("name") or "")

    board = data.get("board") or {}

    return Item(
        id=str(data["id"]),
        name=data.get("name") or "",
        columns=tuple(parse_column(c) for c in data.get("column_values") or []),
        updates=tuple(
            Update(
                id=str(u.get("id", "")),
                body=u.get("body") or "",
                created_at=parse_timestamp(u.get("created_at")),
            )
            for u in data.get("updates") or []
        ),
        parent=parent,
        board_id=str(board["id"]) if board.get("id") else None,
    )
