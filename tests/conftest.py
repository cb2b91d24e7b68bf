"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from ticketbridge.board import Column, Item, LinkValue, ParentRef, PeopleValue, Update
from ticketbridge.config import ColumnMap

BOARD_ID = "18393273008"
COLUMNS = ColumnMap()


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("ticketbridge")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_item() -> Callable[..., Item]:
    """Factory for subitem snapshots as the board returns them."""

    def _make(
        item_id: str = "101",
        name: str = "LQA - Button text cut off",
        *,
        status: str = "Ready for Jira",
        link: str | None = None,
        type_of_issue: str = "UI issue",
        languages: str = "German, French",
        priority: str = "High",
        update: str | None = None,
        parent_id: str | None = "900",
    ) -> Item:
        columns = [
            Column(id=COLUMNS.status, text=status),
            Column(id=COLUMNS.type_of_issue, text=type_of_issue),
            Column(id=COLUMNS.languages, text=languages),
            Column(id=COLUMNS.priority, text=priority),
        ]
        if link is not None:
            columns.append(
                Column(id=COLUMNS.item_link, text=link, value=LinkValue(url=link, text=link))
            )
        updates = ()
        if update is not None:
            updates = (
                Update(
                    id="u1",
                    body=update,
                    created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
                ),
            )
        return Item(
            id=item_id,
            name=name,
            columns=tuple(columns),
            updates=updates,
            parent=ParentRef(id=parent_id, name="Checkout") if parent_id else None,
            board_id=BOARD_ID,
        )

    return _make


@pytest.fixture
def make_parent() -> Callable[..., Item]:
    """Factory for parent items carrying the tracker link and reporter."""

    def _make(
        item_id: str = "900",
        name: str = "Checkout LQA",
        *,
        link: str | None = "https://acme.atlassian.net/browse/DOM2-6747",
        person_id: str | None = None,
    ) -> Item:
        columns = []
        if link is not None:
            columns.append(
                Column(id=COLUMNS.parent_link, text=link, value=LinkValue(url=link, text=link))
            )
        if person_id is not None:
            columns.append(
                Column(
                    id=COLUMNS.person,
                    text="Dana",
                    value=PeopleValue(person_ids=(person_id,)),
                )
            )
        return Item(id=item_id, name=name, columns=tuple(columns), board_id="555")

    return _make
