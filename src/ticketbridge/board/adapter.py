"""MondayAdapter - Interfaces with the Monday.com GraphQL API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ticketbridge.board.exceptions import BoardError, BoardNotFoundError, ItemNotFoundError
from ticketbridge.board.models import (
    Column,
    ColumnPayload,
    Item,
    LinkValue,
    StatusValue,
    parse_column,
    parse_item,
)
from ticketbridge.logging import loggable_body

logger = logging.getLogger("ticketbridge.board")

PAGE_LIMIT = 500
UPDATES_LIMIT = 20

_ITEM_FIELDS = f"""
    id
    name
    board {{
        id
    }}
    parent_item {{
        id
        name
    }}
    column_values {{
        id
        text
        value
        type
    }}
    updates(limit: {UPDATES_LIMIT}) {{
        id
        body
        created_at
    }}
"""


class MondayAdapter:
    """Adapter for Monday.com boards.

    Uses the Monday GraphQL API to read items and write column values.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.monday.com/v2",
        timeout: float = 30.0,
        api_version: str = "2024-01",
    ) -> None:
        """Initialize Monday Adapter.

        Args:
            token: Monday API token
            base_url: Monday GraphQL API URL (for testing)
            timeout: Per-request timeout in seconds
            api_version: Value of the API-Version header
        """
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self.api_version = api_version
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GraphQL API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": self.token,
                    "Content-Type": "application/json",
                    "API-Version": self.api_version,
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Response data

        Raises:
            BoardError: If the request fails or the API reports errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            raise BoardError(f"Monday request failed: {e}") from e

        if response.status_code != 200:
            raise BoardError(
                f"Monday request failed: {response.status_code} - "
                f"{loggable_body(response.text)}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BoardError(f"Monday returned invalid JSON: {loggable_body(response.text)}") from e
        if not isinstance(data, dict):
            raise BoardError(f"Monday returned unexpected payload: {type(data).__name__}")
        if data.get("errors"):
            raise BoardError(f"Monday errors: {data['errors']}")

        return dict(data.get("data") or {})

    def fetch_item(self, item_id: str) -> Item:
        """Get an item with its columns, updates and parent reference.

        Args:
            item_id: Monday item ID

        Returns:
            Item snapshot

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        query = f"""
        query($itemId: ID!) {{
            items(ids: [$itemId]) {{
                {_ITEM_FIELDS}
            }}
        }}
        """
        data = self._graphql(query, {"itemId": str(item_id)})
        items = data.get("items") or []
        if not items:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return parse_item(items[0])

    def fetch_items_by_board(self, board_id: str) -> list[Item]:
        """Get every item on a board, following pagination cursors.

        Args:
            board_id: Monday board ID

        Returns:
            All items on the board

        Raises:
            BoardNotFoundError: If the board doesn't exist
        """
        logger.debug("Fetching items for board %s", board_id)
        query = f"""
        query($boardId: ID!) {{
            boards(ids: [$boardId]) {{
                items_page(limit: {PAGE_LIMIT}) {{
                    cursor
                    items {{
                        {_ITEM_FIELDS}
                    }}
                }}
            }}
        }}
        """
        data = self._graphql(query, {"boardId": str(board_id)})
        boards = data.get("boards") or []
        if not boards:
            raise BoardNotFoundError(f"Board {board_id} not found")

        page = boards[0].get("items_page") or {}
        raw_items: list[dict[str, Any]] = list(page.get("items") or [])
        cursor = page.get("cursor")

        next_query = f"""
        query($cursor: String!) {{
            next_items_page(cursor: $cursor, limit: {PAGE_LIMIT}) {{
                cursor
                items {{
                    {_ITEM_FIELDS}
                }}
            }}
        }}
        """
        while cursor:
            data = self._graphql(next_query, {"cursor": cursor})
            page = data.get("next_items_page") or {}
            raw_items.extend(page.get("items") or [])
            cursor = page.get("cursor")

        items = [parse_item(raw) for raw in raw_items]
        logger.info("Fetched %d item(s) from board %s", len(items), board_id)
        return items

    def fetch_column(self, item_id: str, column_id: str) -> Column | None:
        """Read a single column of an item.

        Args:
            item_id: Monday item ID
            column_id: Column ID to read

        Returns:
            The column record, or None if the item has no such column

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        query = """
        query($itemId: ID!, $columnId: String!) {
            items(ids: [$itemId]) {
                column_values(ids: [$columnId]) {
                    id
                    text
                    value
                    type
                }
            }
        }
        """
        data = self._graphql(query, {"itemId": str(item_id), "columnId": column_id})
        items = data.get("items") or []
        if not items:
            raise ItemNotFoundError(f"Item {item_id} not found")
        columns = items[0].get("column_values") or []
        return parse_column(columns[0]) if columns else None

    def fetch_user_email(self, user_id: str) -> str | None:
        """Look up a user's email address.

        Args:
            user_id: Monday user ID

        Returns:
            The email, or None if the user is unknown
        """
        query = """
        query($userId: ID!) {
            users(ids: [$userId]) {
                email
            }
        }
        """
        data = self._graphql(query, {"userId": str(user_id)})
        users = data.get("users") or []
        if not users:
            return None
        email: str | None = users[0].get("email")
        return email

    def mutate_column(
        self,
        board_id: str,
        item_id: str,
        column_id: str,
        value: str | ColumnPayload,
    ) -> None:
        """Write a column value.

        Args:
            board_id: Board the item lives on
            item_id: Monday item ID
            column_id: Column ID to write
            value: Scalar string or typed column value

        Raises:
            BoardError: If the mutation fails
        """
        mutation = """
        mutation($boardId: ID!, $itemId: ID!, $columnId: String!, $value: JSON!) {
            change_column_value(
                board_id: $boardId
                item_id: $itemId
                column_id: $columnId
                value: $value
            ) {
                id
            }
        }
        """
        # JSON! takes a JSON document, so plain strings are encoded too
        wire = json.dumps(value if isinstance(value, str) else value.to_wire())
        logger.debug("Writing column %s on item %s", column_id, item_id)
        self._graphql(
            mutation,
            {
                "boardId": str(board_id),
                "itemId": str(item_id),
                "columnId": column_id,
                "value": wire,
            },
        )

    def update_link_column(
        self,
        board_id: str,
        item_id: str,
        column_id: str,
        url: str,
        text: str | None = None,
    ) -> None:
        """Set a link column to ``url`` with optional display text."""
        self.mutate_column(board_id, item_id, column_id, LinkValue(url=url, text=text or url))
        logger.info("Linked item %s to %s", item_id, url)

    def update_status_column(
        self,
        board_id: str,
        item_id: str,
        column_id: str,
        label: str,
    ) -> None:
        """Set a status column to the given label text."""
        self.mutate_column(board_id, item_id, column_id, StatusValue(label=label))
        logger.info("Moved item %s to status %s", item_id, label)
