"""PayloadMapper - Builds tracker ticket payloads from board items."""

from __future__ import annotations

import logging

from ticketbridge.board import Item, PeopleValue
from ticketbridge.classification import Classifier
from ticketbridge.config import ColumnMap
from ticketbridge.mapping.exceptions import MappingError
from ticketbridge.mapping.models import TicketDraft, TicketPayload, UpdateBody
from ticketbridge.mapping.project_key import extract_project_key
from ticketbridge.mapping.text import (
    make_impersonal,
    parse_update_body,
    select_earliest_update,
    strip_qa_marker,
)

logger = logging.getLogger("ticketbridge.mapping")

SUMMARY_TAG = "[LOC]"
DEFAULT_ISSUE_TYPE = "Bug"
DEFAULT_LANGUAGES = "All languages"
DEFAULT_PRIORITY = "Medium"
DEFAULT_TYPE_OF_ISSUE = "Bug"
NO_SCREENSHOT = "No screenshot available"
NO_UPDATES = "No updates found"
NO_TRACKER_LINK = "No Jira link found"

DESCRIPTION_TEMPLATE = """Hi!

We are done with the LQA for {parent_name}. We have found this issue:

Issue: {issue}
Affected languages: {languages}

Screenshot:
{screenshot}

Thanks!"""


class PayloadMapper:
    """Maps a board item and its parent to a tracker ticket payload.

    The parent carries the tracker link that determines the project; the
    item carries the issue name, category, languages and the updates whose
    earliest entry is the original report.
    """

    def __init__(
        self,
        classifier: Classifier | None = None,
        columns: ColumnMap | None = None,
        issue_type: str = DEFAULT_ISSUE_TYPE,
    ) -> None:
        """Initialize the Payload Mapper.

        Args:
            classifier: Label classifier. Defaults to the production rule table.
            columns: Board column ids.
            issue_type: Tracker issue type for created tickets.
        """
        self.classifier = classifier or Classifier()
        self.columns = columns or ColumnMap()
        self.issue_type = issue_type

    def parent_link_url(self, parent: Item) -> str:
        """URL held by the parent's tracker link column, or ""."""
        column = parent.column(self.columns.parent_link)
        if column is None:
            return ""
        return column.link_url or column.text

    def project_key_for(self, parent: Item) -> str:
        """Extract the tracker project key from the parent's link column.

        Raises:
            MappingError: If no project key can be found.
        """
        key = extract_project_key(self.parent_link_url(parent))
        if not key:
            raise MappingError(
                f"project key not found in parent item {parent.name!r} "
                f"column {self.columns.parent_link}"
            )
        return key

    def reporter_id(self, parent: Item) -> str | None:
        """First person id in the parent's people column, if any."""
        value = parent.column_value(self.columns.person)
        if isinstance(value, PeopleValue) and value.person_ids:
            return value.person_ids[0]
        return None

    def summary_for(
        self, item: Item, parent: Item, impersonal: bool = False, strict: bool = True
    ) -> str:
        """``[LOC] <parent> LQA - <item>``; raises on an empty item name when strict."""
        parent_name = strip_qa_marker(parent.name) or "Unknown"
        item_name = strip_qa_marker(item.name)
        if impersonal:
            item_name = make_impersonal(item_name)
        if strict and not item_name:
            raise MappingError(f"Item {item.id} has no name")
        return f"{SUMMARY_TAG} {parent_name} LQA - {item_name}"

    def reported_body(self, item: Item) -> tuple[UpdateBody, str]:
        """Parsed earliest update and its raw markup."""
        update = select_earliest_update(item.updates)
        raw = update.body if update else ""
        return parse_update_body(raw), raw

    def render_description(self, item: Item, parent: Item, body: UpdateBody) -> str:
        return DESCRIPTION_TEMPLATE.format(
            parent_name=strip_qa_marker(parent.name) or "Unknown",
            issue=body.description or strip_qa_marker(item.name),
            languages=item.column_text(self.columns.languages) or DEFAULT_LANGUAGES,
            screenshot=body.screenshot or NO_SCREENSHOT,
        )

    def labels_for(self, item: Item, body: UpdateBody) -> tuple[str, ...]:
        type_of_issue = item.column_text(self.columns.type_of_issue)
        labels = self.classifier.classify(type_of_issue, item.name, body.description)
        logger.info("Type of issue %r -> labels %s", type_of_issue, labels)
        return tuple(labels)

    def build_payload(self, item: Item, parent: Item, *, impersonal: bool = False) -> TicketPayload:
        """Build the ticket payload for an item.

        Args:
            item: The board item reporting the issue.
            parent: The item's parent (holds the tracker link).
            impersonal: Rewrite first-person item names in the summary.

        Returns:
            A payload ready for submission.

        Raises:
            MappingError: If the project key or item name is missing.
        """
        project_key = self.project_key_for(parent)
        summary = self.summary_for(item, parent, impersonal=impersonal)
        body, _ = self.reported_body(item)

        return TicketPayload(
            project_key=project_key,
            summary=summary,
            description=self.render_description(item, parent, body),
            labels=self.labels_for(item, body),
            issue_type=self.issue_type,
        )

    def build_draft(
        self,
        item: Item,
        parent: Item | None,
        *,
        existing_link: str | None = None,
        reporter_email: str | None = None,
    ) -> TicketDraft:
        """Build pre-filled fields for interactive review.

        Mapping failures are reported on the draft instead of raised.
        """
        if parent is None:
            parent = Item(id="", name="")
        body, raw = self.reported_body(item)
        type_of_issue = item.column_text(self.columns.type_of_issue) or DEFAULT_TYPE_OF_ISSUE

        payload: TicketPayload | None = None
        mapping_error: str | None = None
        try:
            payload = self.build_payload(item, parent, impersonal=True)
        except MappingError as e:
            logger.warning("Draft for item %s has no payload: %s", item.id, e)
            mapping_error = str(e)

        if payload is not None:
            project_key = payload.project_key
            summary = payload.summary
            description = payload.description
            labels = payload.labels
        else:
            url = self.parent_link_url(parent)
            project_key = f"Not found in: {url}" if url else NO_TRACKER_LINK
            summary = self.summary_for(item, parent, impersonal=True, strict=False)
            description = self.render_description(item, parent, body)
            labels = self.labels_for(item, body)

        return TicketDraft(
            project_key=project_key,
            summary=summary,
            description=description,
            labels=labels,
            type_of_issue=type_of_issue,
            priority=item.column_text(self.columns.priority) or DEFAULT_PRIORITY,
            languages=item.column_text(self.columns.languages) or DEFAULT_LANGUAGES,
            screenshot=body.screenshot,
            raw_update_body=raw or NO_UPDATES,
            existing_link=existing_link,
            reporter_email=reporter_email,
            payload=payload,
            mapping_error=mapping_error,
        )
